from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from urllib.parse import unquote_to_bytes

from mimefields.core.config import get_settings
from mimefields.header.utility import remove_quotes_if_any

logger = logging.getLogger("mimefields.header")

# name, name*, name*0, name*0*
_PARAM_KEY_RE = re.compile(r"^(?P<name>[^*]+)(?:\*(?P<index>\d{1,9}))?(?P<extended>\*)?$")


@dataclass
class _ContinuationSegment:
    index: int
    value: str
    extended: bool


@dataclass
class _Continuation:
    name: str
    segments: list[_ContinuationSegment] = field(default_factory=list)


def _split_segments(raw: str) -> list[str]:
    """Split on ``;`` that is not inside a quoted-string."""
    segments: list[str] = []
    current: list[str] = []
    in_quotes = False
    escaped = False
    for ch in raw:
        if escaped:
            current.append(ch)
            escaped = False
            continue
        if ch == "\\" and in_quotes:
            current.append(ch)
            escaped = True
            continue
        if ch == '"':
            in_quotes = not in_quotes
        if ch == ";" and not in_quotes:
            segments.append("".join(current))
            current = []
            continue
        current.append(ch)
    segments.append("".join(current))
    return segments


def _decode_bytes(data: bytes, charset: str) -> str:
    fallback = get_settings().FALLBACK_CHARSET
    if not charset:
        return data.decode(fallback, errors="replace")
    try:
        return data.decode(charset, errors="replace")
    except LookupError:
        logger.debug("Unknown RFC 2231 charset %r, decoding as %s", charset, fallback)
        return data.decode(fallback, errors="replace")


def _split_charset(value: str) -> tuple[str, str]:
    """Split ``charset'language'data`` and return (charset, data)."""
    pieces = value.split("'", 2)
    if len(pieces) != 3:
        return "", value
    charset, _language, data = pieces
    return charset.strip(), data


def _join_continuation(continuation: _Continuation) -> str:
    segments = sorted(continuation.segments, key=lambda s: s.index)

    charset = ""
    out: list[str] = []
    pending = bytearray()
    for position, segment in enumerate(segments):
        if segment.extended:
            data = remove_quotes_if_any(segment.value.strip())
            # Only the first segment may declare a charset.
            if position == 0:
                charset, data = _split_charset(data)
            pending.extend(unquote_to_bytes(data))
            continue
        if pending:
            out.append(_decode_bytes(bytes(pending), charset))
            pending.clear()
        out.append(remove_quotes_if_any(segment.value.strip()))
    if pending:
        out.append(_decode_bytes(bytes(pending), charset))
    return "".join(out)


def decode_parameters(raw: str) -> list[tuple[str, str]]:
    """Split a structured header value into ordered (key, value) pairs.

    The leading bare token, for example ``text/plain`` in a Content-Type, is
    returned with an empty key. RFC 2231 continuations and charset-tagged
    parameters are collapsed into a single pair placed where their first
    segment appeared. Plain values are returned as written, quotes included.
    """
    pairs: list[tuple[str, str]] = []
    continuations: dict[str, _Continuation] = {}
    slots: dict[str, int] = {}

    for position, segment in enumerate(_split_segments(raw)):
        segment = segment.strip()
        if not segment:
            continue

        if "=" not in segment:
            if position == 0:
                pairs.append(("", segment))
            else:
                logger.debug("Ignoring parameter without a value: %r", segment)
            continue

        key, value = segment.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            logger.debug("Ignoring parameter without a name: %r", segment)
            continue

        match = _PARAM_KEY_RE.match(key)
        if match is None or (match.group("index") is None and match.group("extended") is None):
            pairs.append((key, value))
            continue

        name = match.group("name").strip()
        folded = name.lower()
        index = int(match.group("index")) if match.group("index") is not None else 0
        continuation = continuations.get(folded)
        if continuation is None:
            continuation = _Continuation(name=name)
            continuations[folded] = continuation
            slots[folded] = len(pairs)
            pairs.append((name, ""))
        continuation.segments.append(
            _ContinuationSegment(index=index, value=value, extended=match.group("extended") is not None)
        )

    for folded, continuation in continuations.items():
        pairs[slots[folded]] = (continuation.name, _join_continuation(continuation))

    return pairs
