"""Tests for the CLI implementation."""

import base64
import json

import pytest
from typer.testing import CliRunner

from spiral.cli import app


class TestCLI:
    """Test the CLI functionality."""

    @pytest.fixture
    def runner(self):
        """CLI test runner."""
        return CliRunner()

    @pytest.fixture
    def hello_url(self, httpserver):
        """URL answering with a small text body."""
        httpserver.expect_request("/hello").respond_with_data(b"Hello, world", content_type="text/plain")
        return httpserver.url_for("/hello")

    def test_single_url_json_pretty(self, runner, hello_url):
        """Test single URL output with pretty JSON."""
        result = runner.invoke(app, [hello_url])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["status"] == 200
        assert payload["size"] == 12
        assert base64.b64decode(payload["body_b64"]) == b"Hello, world"

    @pytest.mark.parametrize("mode", [[], ["--sync"]])
    def test_multiple_urls_jsonl(self, runner, hello_url, mode):
        """Test multiple URLs emit JSON lines, async and sync."""
        result = runner.invoke(app, mode + [hello_url, hello_url])

        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert len(lines) == 2
        for line in lines:
            obj = json.loads(line)
            assert obj["success"] is True
            assert obj["status"] == 200

    def test_force_jsonl_single_url(self, runner, hello_url):
        """Test --jsonl flag forces JSONL even for a single URL."""
        result = runner.invoke(app, ["--jsonl", hello_url])

        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["success"] is True

    def test_fields_filter(self, runner, hello_url):
        result = runner.invoke(app, ["--fields", "status,size", hello_url])

        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert set(payload) == {"status", "size", "success"}

    def test_body_output(self, runner, hello_url):
        """Test --body writes the raw body."""
        result = runner.invoke(app, ["--body", hello_url])

        assert result.exit_code == 0
        assert result.stdout == "Hello, world"

    def test_body_to_file(self, runner, hello_url, tmp_path):
        out = tmp_path / "body.bin"
        result = runner.invoke(app, ["--body", "-o", str(out), hello_url])

        assert result.exit_code == 0
        assert out.read_bytes() == b"Hello, world"

    def test_output_file(self, runner, hello_url, tmp_path):
        """Test -o writes JSON to a file."""
        out = tmp_path / "result.json"
        result = runner.invoke(app, ["-o", str(out), hello_url])

        assert result.exit_code == 0
        assert json.loads(out.read_text())["status"] == 200

    def test_post_data(self, runner, httpserver):
        """Test -X, -H and -d reach the server."""
        httpserver.expect_request(
            "/submit", method="POST", data=b"a=1", headers={"X-Token": "t"}
        ).respond_with_data(b"ok", status=201)

        result = runner.invoke(
            app, ["-X", "POST", "-H", "X-Token: t", "-d", "a=1", httpserver.url_for("/submit")]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["status"] == 201

    def test_post_file_data(self, runner, httpserver, tmp_path):
        data_file = tmp_path / "data.bin"
        data_file.write_bytes(b"\x00\x01binary")
        httpserver.expect_request("/upload", method="PUT", data=b"\x00\x01binary").respond_with_data(b"ok")

        result = runner.invoke(app, ["--sync", "-X", "PUT", "-d", f"@{data_file}", httpserver.url_for("/upload")])

        assert result.exit_code == 0

    def test_error_status_exit_code(self, runner, httpserver):
        """Test HTTP errors produce exit code 1 but still report."""
        httpserver.expect_request("/missing").respond_with_data(b"gone", status=404)

        result = runner.invoke(app, [httpserver.url_for("/missing")])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert payload["status"] == 404

    @pytest.mark.parametrize("mode", [[], ["--sync"]])
    def test_connection_failure(self, runner, mode):
        """Test transport errors are reported as failed results."""
        result = runner.invoke(app, mode + ["-O", "connect_timeout=1", "http://127.0.0.1:1/"])

        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert "request failed" in payload["error"]

    def test_options_applied(self, runner, httpserver):
        """Test -O options reach the transport."""
        httpserver.expect_request("/ua", headers={"User-Agent": "cli-test"}).respond_with_data(b"ok")

        result = runner.invoke(app, ["-O", "user_agent=cli-test", httpserver.url_for("/ua")])

        assert result.exit_code == 0

    def test_invalid_option(self, runner, hello_url):
        """Test bad option values are usage errors."""
        result = runner.invoke(app, ["-O", "cookie_file=/no/such/file", hello_url])
        assert result.exit_code == 2

        result = runner.invoke(app, ["-O", "nonsense", hello_url])
        assert result.exit_code == 2

    @pytest.mark.parametrize("mode", [[], ["--sync"]])
    def test_invalid_cookie_file(self, runner, hello_url, tmp_path, mode):
        """Test a malformed cookie file is a usage error in both modes."""
        cookies = tmp_path / "cookies.txt"
        cookies.write_text("not a cookie file\n")

        result = runner.invoke(app, mode + ["-O", f"cookie_file={cookies}", hello_url])

        assert result.exit_code == 2

    def test_invalid_header(self, runner, hello_url):
        result = runner.invoke(app, ["-H", "no-colon", hello_url])

        assert result.exit_code == 2

    def test_body_needs_single_url(self, runner, hello_url):
        result = runner.invoke(app, ["--body", hello_url, hello_url])

        assert result.exit_code == 2

    def test_stdin_urls(self, runner, hello_url):
        """Test '-' reads URLs from stdin."""
        result = runner.invoke(app, ["-"], input=f"{hello_url}\n\n{hello_url}\n")

        assert result.exit_code == 0
        assert len(result.stdout.strip().splitlines()) == 2

    def test_no_urls(self, runner):
        result = runner.invoke(app, [])

        assert result.exit_code == 1
