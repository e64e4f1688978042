from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import orjson

from mimefields.header.errors import UnsupportedHeaderError
from mimefields.header.fields import (
    parse_content_disposition,
    parse_content_transfer_encoding,
    parse_content_type,
    parse_id,
    parse_importance,
    parse_multiple_ids,
)
from mimefields.header.types import ParsedHeaderFields

logger = logging.getLogger("mimefields.header")

# lower-cased header name -> (ParsedHeaderFields attribute, parser)
_FIELD_PARSERS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "content-transfer-encoding": ("content_transfer_encoding", parse_content_transfer_encoding),
    "importance": ("importance", parse_importance),
    "content-type": ("content_type", parse_content_type),
    "content-disposition": ("content_disposition", parse_content_disposition),
    "message-id": ("message_id", parse_id),
    "content-id": ("content_id", parse_id),
    "in-reply-to": ("in_reply_to", parse_multiple_ids),
    "references": ("references", parse_multiple_ids),
}


def is_supported_header(name: str) -> bool:
    return (name or "").strip().lower() in _FIELD_PARSERS


def parse_header_field(name: str, value: str) -> Any:
    entry = _FIELD_PARSERS.get((name or "").strip().lower())
    if entry is None:
        raise UnsupportedHeaderError(header_name=name)
    _attr, parser = entry
    return parser(value)


def _iter_headers(
    headers: Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> Iterable[tuple[str, Any]]:
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


def parse_header_fields(
    headers: Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> ParsedHeaderFields:
    """Parse every supported header in ``headers``.

    A header that fails to parse is logged and left out of the result, so one
    broken field never costs the rest of the message. When a header occurs
    more than once the last occurrence wins.
    """
    values: dict[str, Any] = {}
    for name, raw in _iter_headers(headers):
        entry = _FIELD_PARSERS.get((name or "").strip().lower())
        if entry is None or raw is None:
            continue
        attr, parser = entry
        # HeaderFieldError is a ValueError; stdlib date and codec failures land here too.
        try:
            values[attr] = parser(str(raw))
        except (ValueError, OverflowError) as exc:
            logger.warning("Dropping unparsable %s header %r: %s", name, str(raw), exc)
            values.pop(attr, None)

    return ParsedHeaderFields(**values)


def dump_header_fields(fields: ParsedHeaderFields) -> bytes:
    # Parsed dates are naive UTC.
    return orjson.dumps(fields, option=orjson.OPT_SORT_KEYS | orjson.OPT_NAIVE_UTC)
