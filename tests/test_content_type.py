from __future__ import annotations

import pytest

from mimefields.header.errors import InvalidHeaderArgumentError
from mimefields.header.fields import correct_charset, parse_content_type


@pytest.mark.parametrize("raw", ["text", "TEXT/", "Text", "text/"])
def test_bare_text_media_type_becomes_text_plain(raw: str) -> None:
    assert parse_content_type(raw).media_type == "text/plain"


def test_charset_and_encoded_word_name() -> None:
    ct = parse_content_type(
        'text/plain; charset="UTF-8"; name="=?utf-8?Q?r=C3=A9sum=C3=A9.txt?="'
    )

    assert ct.media_type == "text/plain"
    assert ct.charset == "UTF-8"
    assert ct.name == "résumé.txt"
    assert ct.boundary is None
    assert ct.parameters == {}


def test_unknown_parameters_are_kept() -> None:
    ct = parse_content_type("application/octet-stream; title=Report")

    assert ct.media_type == "application/octet-stream"
    assert ct.parameters == {"TITLE": "Report"}
    assert ct.get_parameter("title") == "Report"


def test_report_type_parameter() -> None:
    ct = parse_content_type(
        'multipart/report; report-type=delivery-status; boundary="9B095B5ADSN=_01D0"'
    )

    assert ct.media_type == "multipart/report"
    assert ct.boundary == "9B095B5ADSN=_01D0"
    assert ct.parameters == {"REPORT-TYPE": "delivery-status"}


def test_boundary_is_kept_verbatim() -> None:
    ct = parse_content_type('multipart/mixed; boundary="----=_Part_0_1234.5678"')
    assert ct.media_type == "multipart/mixed"
    assert ct.boundary == "----=_Part_0_1234.5678"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("utf-8", "utf-8"),
        ('"iso-8859-1"', "iso-8859-1"),
        (" 'us-ascii' ", "us-ascii"),
        ("windows-1252;", "windows-1252"),
        ("ANSI_X3.4-1968", "ANSI_X3.4-1968"),
        ("utf8", "utf8"),
        ('""', ""),
        ("", ""),
    ],
)
def test_correct_charset(raw: str, expected: str) -> None:
    assert correct_charset(raw) == expected


def test_charset_with_stray_quoting_is_cleaned() -> None:
    ct = parse_content_type("text/html; charset='utf-8'")
    assert ct.charset == "utf-8"


def test_rfc2231_encoded_name() -> None:
    ct = parse_content_type("application/pdf; name*=utf-8''r%C3%A9sum%C3%A9.pdf")
    assert ct.name == "résumé.pdf"


def test_rfc2231_continued_name() -> None:
    ct = parse_content_type('application/pdf; name*0="quarterly-"; name*1="report.pdf"')
    assert ct.name == "quarterly-report.pdf"


def test_parameter_keys_are_case_insensitive() -> None:
    ct = parse_content_type("TEXT/HTML; CharSet=utf-8; NAME=page.html; Format=flowed")

    assert ct.media_type == "TEXT/HTML"
    assert ct.charset == "utf-8"
    assert ct.name == "page.html"
    assert ct.parameters == {"FORMAT": "flowed"}


def test_repeated_parameter_last_one_wins() -> None:
    ct = parse_content_type("text/plain; charset=us-ascii; charset=utf-8; x=1; x=2")
    assert ct.charset == "utf-8"
    assert ct.parameters == {"X": "2"}


def test_empty_header_falls_back_to_default_media_type() -> None:
    assert parse_content_type("").media_type == "text/plain"
    assert parse_content_type("; charset=utf-8").media_type == "text/plain"


def test_default_media_type_comes_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MIMEFIELDS_DEFAULT_MEDIA_TYPE", "application/octet-stream")
    assert parse_content_type("").media_type == "application/octet-stream"


def test_content_type_rejects_none() -> None:
    with pytest.raises(InvalidHeaderArgumentError):
        parse_content_type(None)
