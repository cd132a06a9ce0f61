"""Frame decoder for log drain bodies."""

from typing import Iterable, Iterator, Protocol

from ..errors import FramingError
from ..models import FramingMode, LogFrame

LOGPLEX_CONTENT_TYPE = "application/logplex-1"

_WHITESPACE = b" \t\r\n"
_NEWLINE_CONTENT_TYPES = ("text/plain", "application/x-ndjson", "application/jsonl")


def framing_mode_for(content_type: str | None) -> FramingMode:
    """Pick the framing rule announced by the request content type.

    Logplex uses octet counting and is also assumed when no type is sent.
    """
    if not content_type:
        return FramingMode.OCTET_COUNTING
    media_type = content_type.split(";", 1)[0].strip().lower()
    if media_type in _NEWLINE_CONTENT_TYPES:
        return FramingMode.NEWLINE
    return FramingMode.OCTET_COUNTING


class IFrameDecoder(Protocol):
    """Splits a drain body into frames."""

    def decode(self, body: bytes, source_token: str) -> Iterator[LogFrame]:
        """Yield frames in body order; raise FramingError on broken framing."""
        ...


class FrameDecoder:
    """Lazy, single-pass frame decoder."""

    def __init__(self, mode: FramingMode = FramingMode.OCTET_COUNTING):
        self._mode = mode

    @property
    def mode(self) -> FramingMode:
        return self._mode

    def decode(self, body: bytes, source_token: str) -> Iterator[LogFrame]:
        if self._mode is FramingMode.NEWLINE:
            return self._decode_lines(body, source_token)
        return self._decode_octet_counted(body, source_token)

    def _decode_octet_counted(
        self, body: bytes, source_token: str
    ) -> Iterator[LogFrame]:
        pos = 0
        end_of_body = len(body)

        while True:
            while pos < end_of_body and body[pos] in _WHITESPACE:
                pos += 1
            if pos >= end_of_body:
                return

            separator = body.find(b" ", pos)
            if separator == -1:
                raise FramingError("missing space after frame length", offset=pos)

            prefix = body[pos:separator]
            if not prefix.isdigit():
                raise FramingError(
                    f"invalid frame length prefix {prefix[:20]!r}", offset=pos
                )

            length = int(prefix)
            start = separator + 1
            end = start + length
            if end > end_of_body:
                raise FramingError(
                    f"frame declares {length} bytes but only "
                    f"{end_of_body - start} remain",
                    offset=pos,
                )

            yield LogFrame(
                payload=body[start:end].rstrip(b"\r\n"),
                source_token=source_token,
                offset=pos,
                declared_length=length,
            )
            pos = end

    def _decode_lines(self, body: bytes, source_token: str) -> Iterator[LogFrame]:
        offset = 0
        for line in body.split(b"\n"):
            payload = line.rstrip(b"\r")
            if payload.strip():
                yield LogFrame(
                    payload=payload, source_token=source_token, offset=offset
                )
            offset += len(line) + 1


def encode_frames(messages: Iterable[str]) -> bytes:
    """Build an octet-counted drain body, one newline-terminated frame per message."""
    chunks = []
    for message in messages:
        data = message.encode("utf-8") + b"\n"
        chunks.append(b"%d %s" % (len(data), data))
    return b"".join(chunks)
