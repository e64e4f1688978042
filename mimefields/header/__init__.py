from __future__ import annotations

from mimefields.header.dispatch import (  # noqa: F401
    dump_header_fields,
    is_supported_header,
    parse_header_field,
    parse_header_fields,
)
from mimefields.header.errors import (  # noqa: F401
    HeaderDateError,
    HeaderFieldError,
    HeaderSizeError,
    InvalidHeaderArgumentError,
    UnknownDispositionParameterError,
    UnsupportedHeaderError,
)
from mimefields.header.fields import (  # noqa: F401
    correct_charset,
    parse_content_disposition,
    parse_content_transfer_encoding,
    parse_content_type,
    parse_id,
    parse_importance,
    parse_multiple_ids,
)
from mimefields.header.serialize import (  # noqa: F401
    format_content_disposition,
    format_content_type,
)
from mimefields.header.types import (  # noqa: F401
    ContentDispositionInfo,
    ContentTypeInfo,
    ParsedHeaderFields,
    Priority,
    TransferEncoding,
)
