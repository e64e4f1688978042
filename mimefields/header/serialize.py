from __future__ import annotations

import re
from datetime import datetime
from email.header import Header
from email.utils import encode_rfc2231, format_datetime

from mimefields.header.types import ContentDispositionInfo, ContentTypeInfo

# RFC 2045 token: any printable ASCII except SPACE and tspecials.
_TOKEN_RE = re.compile(r'^[!#$%&\'*+\-.0-9A-Z^_`a-z{|}~]+$')


def _needs_encoding(value: str) -> bool:
    # The parser strips one pair of quotes but never undoes backslash escapes.
    return not value.isascii() or '"' in value or "\\" in value


def _quote(value: str) -> str:
    if _TOKEN_RE.match(value):
        return value
    return f'"{value}"'


def _param(key: str, value: str) -> str:
    if _needs_encoding(value):
        return f"{key}*={encode_rfc2231(value, 'utf-8')}"
    return f"{key}={_quote(value)}"


def _text_param(key: str, value: str) -> str:
    # name/filename are encoded-word decoded on the way in, so literal "=?" must be encoded too.
    if _needs_encoding(value) or "=?" in value:
        # maxlinelen=0 disables folding
        return f"{key}={_quote(Header(value, 'utf-8').encode(maxlinelen=0))}"
    return f"{key}={_quote(value)}"


def _format_date(value: datetime) -> str:
    return _quote(format_datetime(value))


def format_content_type(info: ContentTypeInfo) -> str:
    parts = [info.media_type]
    if info.charset is not None:
        parts.append(_param("charset", info.charset))
    if info.boundary is not None:
        parts.append(_param("boundary", info.boundary))
    if info.name is not None:
        parts.append(_text_param("name", info.name))
    for key, value in info.parameters.items():
        parts.append(_param(key.lower(), value))
    return "; ".join(parts)


def format_content_disposition(info: ContentDispositionInfo) -> str:
    parts = [info.disposition_type]
    if info.file_name is not None:
        parts.append(_text_param("filename", info.file_name))
    if info.creation_date is not None:
        parts.append(f"creation-date={_format_date(info.creation_date)}")
    if info.modification_date is not None:
        parts.append(f"modification-date={_format_date(info.modification_date)}")
    if info.read_date is not None:
        parts.append(f"read-date={_format_date(info.read_date)}")
    if info.size is not None:
        parts.append(f"size={info.size}")
    for key, value in info.parameters.items():
        parts.append(_param(key, value))
    return "; ".join(parts)
