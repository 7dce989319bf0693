"""Line framing for streamed generation output.

Both hops of a generation (provider -> backend, backend -> client) carry
newline-delimited ``data: <json>`` frames and finish with ``data: [DONE]``.
"""
import codecs
import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


def encode_payload(record: dict[str, Any]) -> str:
    """JSON text carried after ``data: ``. Non-ASCII text is kept as-is."""
    return json.dumps(record, ensure_ascii=False)


class FrameDecoder:
    """Incremental decoder turning raw transport chunks into decoded records.

    Chunk boundaries may fall anywhere, including inside a multi-byte UTF-8
    sequence; the output only depends on the concatenated byte stream.
    """

    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self.finished = False

    def feed(self, chunk: bytes) -> list[dict[str, Any]]:
        if self.finished:
            return []
        self._buffer += self._decoder.decode(chunk)
        lines = self._buffer.split("\n")
        self._buffer = lines.pop()
        return self._parse_lines(lines)

    def close(self) -> list[dict[str, Any]]:
        """Flush at end-of-data. A trailing unterminated line is parsed as-is."""
        if self.finished:
            return []
        self._buffer += self._decoder.decode(b"", final=True)
        tail, self._buffer = self._buffer, ""
        records = self._parse_lines([tail]) if tail else []
        self.finished = True
        return records

    def _parse_lines(self, lines: list[str]) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        for line in lines:
            line = line.rstrip("\r")
            if not line.startswith(DATA_PREFIX):
                continue
            payload = line[len(DATA_PREFIX):]
            if payload == DONE_SENTINEL:
                self.finished = True
                self._buffer = ""
                break
            try:
                record = json.loads(payload)
            except json.JSONDecodeError:
                logger.debug("Skipping undecodable stream line: %r", payload[:80])
                continue
            if isinstance(record, dict):
                records.append(record)
        return records
