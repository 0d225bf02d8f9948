from collections import namedtuple

import pytest

from fcpwire.errors import MissingFieldError, ParseError
from fcpwire.values import URI, ConnectionIdentifier, ContentType, FCPVersion

_FieldStub = namedtuple("_FieldStub", ["key", "value"])


def test_uri_round_trip():
    uri = URI.parse("CHK@")
    assert str(uri) == "CHK@"
    assert uri == URI.parse("CHK@")


def test_uri_inequality():
    assert URI.parse("CHK@") != URI.parse("KSK@a")
    assert URI.parse("KSK@a").uri == "KSK@a"


def test_connection_identifier_keeps_value():
    ident = ConnectionIdentifier("abc")
    assert str(ident) == "abc"
    assert ident == ConnectionIdentifier("abc")


def test_content_type_round_trip():
    content_type = ContentType.parse("text/plain;charset=utf8")
    assert str(content_type) == "text/plain;charset=utf8"
    assert content_type.media_type == "text"
    assert content_type.subtype == "plain"
    assert content_type.parameters == (("charset", "utf8"),)


def test_content_type_octet_stream():
    content_type = ContentType.parse("application/octet-stream")
    assert str(content_type) == "application/octet-stream"
    assert content_type.parameters == ()


def test_content_type_case_insensitive_essence():
    assert ContentType.parse("TEXT/Plain;charset=utf8") == ContentType.parse(
        "text/plain;charset=utf8"
    )


def test_content_type_differs_by_parameters():
    assert ContentType.parse("text/plain;charset=utf8") != ContentType.parse(
        "text/plain"
    )


def test_content_type_quoted_parameter():
    content_type = ContentType.parse('text/plain; charset="utf8"')
    assert content_type == ContentType.parse("text/plain;charset=utf8")


@pytest.mark.parametrize(
    "bad", ["", "text", "text/", "/plain", "te xt/plain", "text/plain;charset"]
)
def test_content_type_rejects_invalid(bad):
    with pytest.raises(ParseError):
        ContentType.parse(bad)


def test_fcp_version_parse():
    assert FCPVersion.parse("2.0") is FCPVersion.V2_0
    assert str(FCPVersion.V2_0) == "2.0"


def test_fcp_version_unknown_raises():
    with pytest.raises(ParseError):
        FCPVersion.parse("1.0")


def test_fcp_version_from_field():
    assert FCPVersion.from_field(_FieldStub("FCPVersion", "2.0")) is FCPVersion.V2_0


def test_fcp_version_from_wrong_field_raises():
    with pytest.raises(MissingFieldError) as info:
        FCPVersion.from_field(_FieldStub("Node", "2.0"))
    assert info.value.field == "FCPVersion"