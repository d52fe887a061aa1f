import base64

import pytest

from spiral.core.model import OptionError, Response
from spiral.core.util import error_asdict, parse_header, response_asdict
from spiral.stream import StringStream


def _response(status: int = 200, body: bytes = b"payload") -> Response:
    return Response(
        status_code=status,
        reason="OK" if status < 400 else "Not Found",
        headers={"Content-Type": "text/plain"},
        body=StringStream(body),
        url="http://example.test/x",
        elapsed=0.25,
        http_version="HTTP/1.1",
    )


class TestResponse:
    """Test the response model."""

    def test_ok(self):
        assert _response(200).ok
        assert _response(302).ok
        assert not _response(404).ok
        assert not _response(500).ok


class TestUtilityFunctions:
    """Test utility functions."""

    def test_response_asdict(self):
        """Test conversion of a response to a dict."""
        res = _response()
        res.body.read(3)

        payload = response_asdict(res)

        assert payload["success"] is True
        assert payload["status"] == 200
        assert payload["reason"] == "OK"
        assert payload["size"] == 7
        assert payload["headers"] == {"Content-Type": "text/plain"}
        assert payload["elapsed"] == 0.25
        assert payload["http_version"] == "HTTP/1.1"
        # whole body regardless of the cursor
        assert base64.b64decode(payload["body_b64"]) == b"payload"
        assert res.body.eof()

    def test_response_asdict_fields(self):
        """Test field filtering keeps success."""
        payload = response_asdict(_response(404), fields=["status"])

        assert payload == {"status": 404, "success": False}

    def test_response_asdict_skips_none(self):
        res = _response()
        res.http_version = None

        assert "http_version" not in response_asdict(res)

    def test_response_asdict_closed_body(self):
        """Test a closed body reports an empty payload and no size."""
        res = _response()
        res.body.close()

        payload = response_asdict(res)
        assert payload["body_b64"] == ""
        assert "size" not in payload

    def test_error_asdict(self):
        payload = error_asdict("http://x", IOError("boom"))

        assert payload == {"success": False, "url": "http://x", "error": "boom"}

    @pytest.mark.parametrize("line,expected", [
        ("Accept: text/html", ("Accept", "text/html")),
        ("X-Empty:", ("X-Empty", "")),
        ("  Host :  example.test ", ("Host", "example.test")),
        ("Authorization: Bearer a:b", ("Authorization", "Bearer a:b")),
    ])
    def test_parse_header(self, line, expected):
        assert parse_header(line) == expected

    @pytest.mark.parametrize("line", ["no colon", ": value"])
    def test_parse_header_invalid(self, line):
        with pytest.raises(OptionError):
            parse_header(line)
