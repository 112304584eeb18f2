import pytest

from csv2json.errors import InvalidUploadError, UploadTooLargeError
from csv2json.upload import (
    check_content,
    check_filename,
    check_size,
    decode_csv_bytes,
    sniff_delimiter,
)


@pytest.mark.parametrize("name", ["data.csv", "DATA.CSV", "my.export.Csv"])
def test_csv_extensions_accepted(name):
    check_filename(name, "text/csv")


@pytest.mark.parametrize("name", ["data.txt", "data.csv.zip", "", None])
def test_other_extensions_rejected(name):
    with pytest.raises(InvalidUploadError):
        check_filename(name, "text/csv")


@pytest.mark.parametrize("content_type", [None, "", "text/plain", "application/vnd.ms-excel", "text/csv; charset=utf-8"])
def test_accepted_content_types(content_type):
    check_filename("data.csv", content_type)


def test_unknown_content_type_rejected():
    with pytest.raises(InvalidUploadError):
        check_filename("data.csv", "image/png")


def test_size_limit():
    check_size(b"a,b\n", limit=4)
    with pytest.raises(UploadTooLargeError):
        check_size(b"a,b\n1", limit=4)


def test_utf8_bom_is_stripped():
    text, report = decode_csv_bytes(b"\xef\xbb\xbfname,age\r\nAlice,30\r\n")
    assert text == "name,age\nAlice,30\n"
    assert report.bom is True
    assert report.decode_used == "utf-8-sig"


def test_bare_carriage_returns_are_normalized():
    text, _ = decode_csv_bytes(b"a,b\r1,2\r")
    assert text == "a,b\n1,2\n"


def test_latin1_is_decoded():
    raw = "name,city\nPaul,Montréal\n".encode("latin-1")
    text, report = decode_csv_bytes(raw)
    assert "Montréal" in text
    assert report.bom is False


def test_content_checks():
    check_content("a,b\n1,2")
    check_content("a;b\n1;2")
    check_content("a\tb\n1\t2", "\t")

    with pytest.raises(InvalidUploadError):
        check_content("  \n \n")
    with pytest.raises(InvalidUploadError):
        check_content("hello\nworld")
    with pytest.raises(InvalidUploadError):
        # a single line is not enough
        check_content("a,b")


def test_sniff_delimiter():
    assert sniff_delimiter("a;b;c\n1;2;3\n4;5;6\n") == ";"
    assert sniff_delimiter("a|b\n1|2\n3|4\n") == "|"


def test_sniff_delimiter_defaults_to_comma():
    assert sniff_delimiter("abc\ndef\n") == ","
