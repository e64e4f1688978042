from __future__ import annotations

import re
import sys
from email import policy
from email.parser import BytesHeaderParser

from mimefields.core.config import get_settings
from mimefields.core.logging import configure_logging
from mimefields.header.dispatch import dump_header_fields, parse_header_fields

_FOLD_RE = re.compile(r"\r?\n(?=[ \t])")


def _read_raw(argv: list[str]) -> bytes:
    if len(argv) > 1 and argv[1] != "-":
        with open(argv[1], "rb") as fh:
            return fh.read()
    return sys.stdin.buffer.read()


def main() -> None:
    configure_logging(settings=get_settings())

    msg = BytesHeaderParser(policy=policy.compat32).parsebytes(_read_raw(sys.argv))
    headers = [(name, _FOLD_RE.sub("", str(value))) for name, value in msg.items()]

    sys.stdout.buffer.write(dump_header_fields(parse_header_fields(headers)))
    sys.stdout.buffer.write(b"\n")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # noqa: BLE001
        print(f"parse_headers failed: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
