from __future__ import annotations


class HeaderFieldError(ValueError):
    """Base class for every failure raised while parsing a header field value."""


class InvalidHeaderArgumentError(HeaderFieldError, TypeError):
    def __init__(self, *, argument: str = "header_value") -> None:
        super().__init__(f"{argument} must not be None")
        self.argument = argument


class UnknownDispositionParameterError(HeaderFieldError):
    def __init__(self, *, parameter: str) -> None:
        super().__init__(f"Unknown parameter in Content-Disposition: {parameter}")
        self.parameter = parameter


class HeaderDateError(HeaderFieldError):
    def __init__(self, *, value: str, reason: str = "not an RFC 2822 date-time") -> None:
        super().__init__(f"Invalid date value {value!r}: {reason}")
        self.value = value


class HeaderSizeError(HeaderFieldError):
    def __init__(self, *, value: str, reason: str = "not a non-negative size") -> None:
        super().__init__(f"Invalid size value {value!r}: {reason}")
        self.value = value


class UnsupportedHeaderError(HeaderFieldError):
    def __init__(self, *, header_name: str) -> None:
        super().__init__(f"No field parser for header: {header_name}")
        self.header_name = header_name
