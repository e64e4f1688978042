from __future__ import annotations

import logging
from email.errors import HeaderParseError
from email.header import decode_header

from mimefields.core.config import get_settings

logger = logging.getLogger("mimefields.header")


def _decode_bytes(data: bytes, charset: str | None) -> str:
    if charset is None:
        # decode_header hands back unencoded runs as raw-unicode-escape bytes.
        return data.decode("raw-unicode-escape")

    # RFC 2231 section 5 allows "charset*language" inside an encoded-word.
    charset = charset.split("*", 1)[0]
    try:
        return data.decode(charset, errors="replace")
    except LookupError:
        fallback = get_settings().FALLBACK_CHARSET
        logger.debug("Unknown encoded-word charset %r, decoding as %s", charset, fallback)
        return data.decode(fallback, errors="replace")


def decode_encoded_words(text: str) -> str:
    """Decode every RFC 2047 encoded-word found in ``text``.

    Text outside encoded-words is passed through, and whitespace separating two
    adjacent encoded-words is dropped. When a word cannot be decoded at all the
    input is returned unchanged.
    """
    if "=?" not in text:
        return text

    try:
        parts = decode_header(text)
    except HeaderParseError as exc:
        logger.debug("Could not decode encoded-words in %r: %s", text, exc)
        return text

    return "".join(
        data if isinstance(data, str) else _decode_bytes(data, charset) for data, charset in parts
    )
