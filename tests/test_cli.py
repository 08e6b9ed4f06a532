"""Tests for the command-line interface."""

from click.testing import CliRunner

from tfmhook.core.signature import verify_signature
from tfmhook.main import cli


class TestSignCommand:
    def test_prints_signature(self, tmp_path, monkeypatch):
        monkeypatch.setenv("GITHUB_WEBHOOK_SECRET", "s3cret")
        monkeypatch.setenv("TFMHOOK_CONFIG_DIR", str(tmp_path))
        payload = tmp_path / "push.json"
        payload.write_bytes(b'{"ref": "refs/heads/main"}')

        result = CliRunner().invoke(cli, ["sign", str(payload)])
        assert result.exit_code == 0
        signature = result.output.strip()
        assert signature.startswith("sha256=")
        assert verify_signature(payload.read_bytes(), signature, "s3cret")

    def test_requires_secret(self, tmp_path, monkeypatch):
        monkeypatch.delenv("GITHUB_WEBHOOK_SECRET", raising=False)
        monkeypatch.setenv("TFMHOOK_CONFIG_DIR", str(tmp_path))
        monkeypatch.chdir(tmp_path)
        payload = tmp_path / "push.json"
        payload.write_bytes(b"{}")

        result = CliRunner().invoke(cli, ["sign", str(payload)])
        assert result.exit_code != 0
        assert "not configured" in result.output


class TestServeCommand:
    def test_help(self):
        result = CliRunner().invoke(cli, ["serve", "--help"])
        assert result.exit_code == 0
        assert "--port" in result.output
