from __future__ import annotations

import logging
import re
from datetime import datetime

from mimefields.core.config import get_settings
from mimefields.header.encoded_word import decode_encoded_words
from mimefields.header.errors import InvalidHeaderArgumentError, UnknownDispositionParameterError
from mimefields.header.rfc2231 import decode_parameters
from mimefields.header.rfc2822 import string_to_date, to_naive_utc
from mimefields.header.size import parse_size
from mimefields.header.types import (
    ContentDispositionInfo,
    ContentTypeInfo,
    Priority,
    TransferEncoding,
)
from mimefields.header.utility import remove_quotes_if_any

logger = logging.getLogger("mimefields.header")

_TRANSFER_ENCODINGS = {
    "7BIT": TransferEncoding.seven_bit,
    "8BIT": TransferEncoding.eight_bit,
    "QUOTED-PRINTABLE": TransferEncoding.quoted_printable,
    "BASE64": TransferEncoding.base64,
    "BINARY": TransferEncoding.binary,
}

_IMPORTANCE = {
    "5": Priority.high,
    "HIGH": Priority.high,
    "3": Priority.normal,
    "NORMAL": Priority.normal,
    "1": Priority.low,
    "LOW": Priority.low,
}

# Word runs joined by single separators, so "utf-8" and "ANSI_X3.4-1968" survive intact.
_CHARSET_NAME_RE = re.compile(r"\w+(?:[.:-]\w+)*")


def _require(header_value: str | None) -> str:
    if header_value is None:
        raise InvalidHeaderArgumentError(argument="header_value")
    return header_value


def _normalized_parameters(header_value: str) -> list[tuple[str, str]]:
    return [
        (key.strip().upper(), remove_quotes_if_any(value.strip()))
        for key, value in decode_parameters(header_value)
    ]


def correct_charset(charset: str) -> str:
    """Keep the first charset-looking token, e.g. ``' "utf-8"; '`` -> ``"utf-8"``."""
    match = _CHARSET_NAME_RE.search(charset)
    return match.group(0) if match else ""


def parse_content_transfer_encoding(header_value: str | None) -> TransferEncoding:
    value = _require(header_value)

    encoding = _TRANSFER_ENCODINGS.get(value.strip().upper())
    if encoding is None:
        # A broken Content-Transfer-Encoding must never abort message processing.
        logger.debug("Wrong Content-Transfer-Encoding was used. It was: %r", value)
        return TransferEncoding.seven_bit
    return encoding


def parse_importance(header_value: str | None) -> Priority:
    value = _require(header_value)

    priority = _IMPORTANCE.get(value.upper())
    if priority is None:
        logger.debug("Unknown importance value %r, using normal importance", value)
        return Priority.normal
    return priority


def parse_content_type(header_value: str | None) -> ContentTypeInfo:
    """Parse a Content-Type value such as ``text/plain; charset=utf-8; name="a.txt"``.

    Unknown parameters are kept in ``parameters`` under their upper-cased name;
    a repeated parameter keeps its last value.
    """
    value = _require(header_value)

    media_type = get_settings().DEFAULT_MEDIA_TYPE
    boundary: str | None = None
    charset: str | None = None
    name: str | None = None
    parameters: dict[str, str] = {}

    for key, param in _normalized_parameters(value):
        if key == "":
            if param.upper() in ("TEXT", "TEXT/"):
                param = "text/plain"
            if param:
                media_type = param
        elif key == "BOUNDARY":
            boundary = param
        elif key == "CHARSET":
            charset = correct_charset(param)
        elif key == "NAME":
            name = decode_encoded_words(param)
        else:
            # Seen in the wild: title, report-type, format, delsp, ...
            parameters[key] = param

    return ContentTypeInfo(
        media_type=media_type,
        boundary=boundary,
        charset=charset,
        name=name,
        parameters=parameters,
    )


def parse_content_disposition(header_value: str | None) -> ContentDispositionInfo:
    """Parse a Content-Disposition value (RFC 2183).

    Raises ``UnknownDispositionParameterError`` for a parameter that is neither
    defined by RFC 2183 nor ``X-`` prefixed. Bad dates and sizes raise the
    errors of the date and size parsers.
    """
    value = _require(header_value)

    disposition_type = get_settings().DEFAULT_DISPOSITION_TYPE
    file_name: str | None = None
    dates: dict[str, datetime] = {}
    size: int | None = None
    parameters: dict[str, str] = {}

    for key, param in _normalized_parameters(value):
        if key == "":
            if param:
                disposition_type = param
        # "filename" is correct, but plenty of senders put the file name in "name".
        elif key in ("NAME", "FILENAME"):
            file_name = decode_encoded_words(param)
        elif key in ("CREATION-DATE", "MODIFICATION-DATE", "READ-DATE"):
            dates[key] = to_naive_utc(string_to_date(param))
        elif key == "SIZE":
            size = parse_size(param)
        elif key == "CHARSET":
            logger.debug("Ignoring charset parameter in Content-Disposition: %r", param)
        elif key.startswith("X-"):
            parameters[key] = param
        else:
            raise UnknownDispositionParameterError(parameter=key)

    return ContentDispositionInfo(
        disposition_type=disposition_type,
        file_name=file_name,
        creation_date=dates.get("CREATION-DATE"),
        modification_date=dates.get("MODIFICATION-DATE"),
        read_date=dates.get("READ-DATE"),
        size=size,
        parameters=parameters,
    )


def parse_id(header_value: str | None) -> str:
    """``" <test@test.com> "`` -> ``"test@test.com"``."""
    value = _require(header_value).strip()
    if value.endswith(">"):
        value = value[:-1]
    if value.startswith("<"):
        value = value[1:]
    # Whitespace just inside the brackets goes too: "< a >" -> "a".
    return value.strip()


def parse_multiple_ids(header_value: str | None) -> list[str]:
    # Split on ">" rather than whitespace: "<a@b><c@d>" is a valid In-Reply-To.
    value = _require(header_value)
    return [parse_id(part) for part in value.strip().split(">") if part.strip()]
