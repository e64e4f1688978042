from __future__ import annotations

import importlib.util
import io
import logging
import sys
from pathlib import Path
from types import ModuleType

import orjson
import pytest

from mimefields.core.logging import ROOT_LOGGER_NAME

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "parse_headers.py"

RAW_MESSAGE = (
    b"Message-ID: <m1@example.test>\r\n"
    b"Content-Type: text/plain;\r\n"
    b" charset=UTF-8\r\n"
    b"References: <a@example.test>\r\n"
    b"\t<b@example.test>\r\n"
    b"X-Mailer: unused\r\n"
    b"\r\n"
    b"body\r\n"
)


@pytest.fixture
def script() -> ModuleType:
    spec = importlib.util.spec_from_file_location("parse_headers", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def _restore_root_logger() -> None:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def _assert_parsed(out: bytes) -> None:
    assert out.endswith(b"\n")
    data = orjson.loads(out)
    assert data["message_id"] == "m1@example.test"
    assert data["content_type"]["media_type"] == "text/plain"
    assert data["content_type"]["charset"] == "UTF-8"
    assert data["references"] == ["a@example.test", "b@example.test"]
    assert data["content_disposition"] is None


def test_script_reads_message_file(
    script: ModuleType,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsysbinary: pytest.CaptureFixture[bytes],
) -> None:
    message = tmp_path / "message.eml"
    message.write_bytes(RAW_MESSAGE)
    monkeypatch.setattr(sys, "argv", ["parse_headers.py", str(message)])

    script.main()

    _assert_parsed(capsysbinary.readouterr().out)


def test_script_reads_stdin_for_dash(
    script: ModuleType,
    monkeypatch: pytest.MonkeyPatch,
    capsysbinary: pytest.CaptureFixture[bytes],
) -> None:
    monkeypatch.setattr(sys, "argv", ["parse_headers.py", "-"])
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(RAW_MESSAGE)))

    script.main()

    _assert_parsed(capsysbinary.readouterr().out)


def test_script_configures_package_logger(
    script: ModuleType,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsysbinary: pytest.CaptureFixture[bytes],
) -> None:
    monkeypatch.setenv("MIMEFIELDS_LOG_LEVEL", "debug")
    message = tmp_path / "message.eml"
    message.write_bytes(RAW_MESSAGE)
    monkeypatch.setattr(sys, "argv", ["parse_headers.py", str(message)])

    script.main()
    capsysbinary.readouterr()

    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG
