"""Output sinks fed by the process read loop.

Every decoded chunk goes to all sinks of its stream in arrival order, so
what was logged and what is returned always agree.
"""

import codecs
from typing import Any, List, Optional, Protocol

import structlog

logger = structlog.get_logger(__name__)


class OutputSink(Protocol):
    def write(self, chunk: str) -> None: ...


class AccumulatingSink:
    """Collects chunks for the returned outcome."""

    def __init__(self):
        self._chunks: List[str] = []

    def write(self, chunk: str) -> None:
        self._chunks.append(chunk)

    def getvalue(self) -> str:
        return "".join(self._chunks)


class ForwardingSink:
    """Forwards chunks to a method of the caller's logger."""

    def __init__(self, target: Any, method: str):
        self._emit = getattr(target, method)

    def write(self, chunk: str) -> None:
        try:
            self._emit(chunk)
        except Exception as e:
            logger.warning("Output logger raised", error=str(e))


def sinks_for(accumulator: AccumulatingSink, output_logger: Optional[Any], method: str) -> List[OutputSink]:
    """Build the sink list for one stream."""
    sinks: List[OutputSink] = [accumulator]
    if output_logger is not None:
        sinks.append(ForwardingSink(output_logger, method))
    return sinks


async def pump(stream, sinks: List[OutputSink], chunk_size: int = 4096) -> None:
    """Read a stream to EOF, decoding UTF-8 incrementally into the sinks."""
    if stream is None:
        return
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        data = await stream.read(chunk_size)
        if not data:
            break
        text = decoder.decode(data)
        if text:
            for sink in sinks:
                sink.write(text)
    tail = decoder.decode(b"", final=True)
    if tail:
        for sink in sinks:
            sink.write(tail)
