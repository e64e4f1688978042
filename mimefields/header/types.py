from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import datetime


class TransferEncoding(enum.StrEnum):
    seven_bit = "7bit"
    eight_bit = "8bit"
    quoted_printable = "quoted-printable"
    base64 = "base64"
    binary = "binary"


class Priority(enum.StrEnum):
    high = "high"
    normal = "normal"
    low = "low"


@dataclass(frozen=True)
class ContentTypeInfo:
    media_type: str
    boundary: str | None = None
    charset: str | None = None
    name: str | None = None
    parameters: dict[str, str] = field(default_factory=dict)

    def get_parameter(self, key: str) -> str | None:
        return self.parameters.get(key.strip().upper())


@dataclass(frozen=True)
class ContentDispositionInfo:
    disposition_type: str
    file_name: str | None = None
    creation_date: datetime | None = None
    modification_date: datetime | None = None
    read_date: datetime | None = None
    size: int | None = None
    parameters: dict[str, str] = field(default_factory=dict)

    @property
    def is_inline(self) -> bool:
        return self.disposition_type.lower() == "inline"

    def get_parameter(self, key: str) -> str | None:
        return self.parameters.get(key.strip().upper())


@dataclass(frozen=True)
class ParsedHeaderFields:
    content_transfer_encoding: TransferEncoding | None = None
    importance: Priority | None = None
    content_type: ContentTypeInfo | None = None
    content_disposition: ContentDispositionInfo | None = None
    message_id: str | None = None
    content_id: str | None = None
    in_reply_to: list[str] = field(default_factory=list)
    references: list[str] = field(default_factory=list)
