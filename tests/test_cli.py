# tests/test_cli.py
import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler
from typer.testing import CliRunner

from b64url.cli.main import app, get_strict_mode, get_text_errors
from b64url.core.codec import encode

runner = CliRunner()

JWT_HEADER_B64 = "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Config env vars must not leak in from the developer's shell."""
    monkeypatch.delenv("B64URL_STRICT", raising=False)
    monkeypatch.delenv("B64URL_TEXT_ERRORS", raising=False)


@pytest.fixture
def binary_file(tmp_path: Path) -> Path:
    path = tmp_path / "blob.bin"
    path.write_bytes(b"\xfb\xff")
    return path


def test_encode_text():
    result = runner.invoke(app, ["encode", "Hello, World!"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "SGVsbG8sIFdvcmxkIQ"


def test_encode_file(binary_file: Path):
    result = runner.invoke(app, ["encode", "--file", str(binary_file)])
    assert result.exit_code == 0
    assert result.stdout.strip() == "-_8"


def test_encode_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["encode", "--file", str(tmp_path / "nope.bin")])
    assert result.exit_code == 1
    assert "not found" in result.stdout.lower()


def test_encode_nothing():
    result = runner.invoke(app, ["encode"])
    assert result.exit_code == 1
    assert "nothing to encode" in result.stdout.lower()


def test_decode_text():
    result = runner.invoke(app, ["decode", "SGVsbG8sIFdvcmxkIQ"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "Hello, World!"


def test_decode_to_file(tmp_path: Path):
    out = tmp_path / "out.bin"
    result = runner.invoke(app, ["decode", "SGk-", "--output", str(out)])
    assert result.exit_code == 0
    assert "Wrote 3 bytes" in result.stdout
    assert out.read_bytes() == b"Hi>"


def test_decode_strict_rejects_standard_alphabet():
    result = runner.invoke(app, ["decode", "SGk+"])
    assert result.exit_code == 1
    assert "decode failed" in result.stdout.lower()


def test_decode_lenient_flag():
    result = runner.invoke(app, ["decode", "--lenient", "SGVs bG8"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "Hello"


def test_decode_lenient_from_env(monkeypatch):
    monkeypatch.setenv("B64URL_STRICT", "0")
    result = runner.invoke(app, ["decode", "SGVs bG8"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "Hello"


def test_decode_strict_flag_overrides_env(monkeypatch):
    monkeypatch.setenv("B64URL_STRICT", "false")
    result = runner.invoke(app, ["decode", "--strict", "SGVs bG8"])
    assert result.exit_code == 1


def test_decode_invalid_utf8():
    token = encode(b"ok\xff")
    result = runner.invoke(app, ["decode", token])
    assert result.exit_code == 1
    assert "utf-8" in result.stdout.lower()


def test_decode_invalid_utf8_replace():
    token = encode(b"ok\xff")
    result = runner.invoke(app, ["decode", token, "--errors", "replace"])
    assert result.exit_code == 0
    assert "ok\ufffd" in result.stdout


def test_decode_text_is_not_markup():
    token = encode("[bold]raw[/bold] :smile:")
    result = runner.invoke(app, ["decode", token])
    assert result.exit_code == 0
    assert "[bold]raw[/bold] :smile:" in result.stdout


def test_encode_json():
    result = runner.invoke(app, ["encode-json", '{"alg":"HS256","typ":"JWT"}'])
    assert result.exit_code == 0
    assert result.stdout.strip() == JWT_HEADER_B64


def test_encode_json_canonical():
    result = runner.invoke(app, ["encode-json", "--canonical", '{"typ": "JWT", "alg": "HS256"}'])
    assert result.exit_code == 0
    assert result.stdout.strip() == JWT_HEADER_B64


def test_encode_json_invalid_input():
    result = runner.invoke(app, ["encode-json", "{not json"])
    assert result.exit_code == 1
    assert "invalid json" in result.stdout.lower()


def test_decode_json():
    result = runner.invoke(app, ["decode-json", JWT_HEADER_B64])
    assert result.exit_code == 0
    assert '"alg": "HS256"' in result.stdout
    assert '"typ": "JWT"' in result.stdout


def test_decode_json_not_json():
    result = runner.invoke(app, ["decode-json", encode("plain text")])
    assert result.exit_code == 1
    assert "not valid json" in result.stdout.lower()


def test_strict_mode_resolution(monkeypatch):
    assert get_strict_mode() is True
    assert get_strict_mode(False) is False
    monkeypatch.setenv("B64URL_STRICT", "off")
    assert get_strict_mode() is False
    monkeypatch.setenv("B64URL_STRICT", "1")
    assert get_strict_mode() is True


def test_text_errors_resolution(monkeypatch):
    assert get_text_errors() == "strict"
    monkeypatch.setenv("B64URL_TEXT_ERRORS", "replace")
    assert get_text_errors() == "replace"
    assert get_text_errors("ignore") == "ignore"


@pytest.fixture
def restore_package_logger():
    """--verbose attaches a handler to the package logger; undo it afterwards."""
    package_logger = logging.getLogger("b64url")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield package_logger
    package_logger.handlers = handlers
    package_logger.setLevel(level)


def test_verbose_enables_debug_logging(restore_package_logger):
    result = runner.invoke(app, ["--verbose", "encode", "hi"])
    assert result.exit_code == 0
    assert "Debug logging enabled" in result.output
    assert "aGk" in result.output


def test_verbose_twice_keeps_one_handler(restore_package_logger):
    runner.invoke(app, ["--verbose", "encode", "hi"])
    runner.invoke(app, ["--verbose", "encode", "hi"])
    rich_handlers = [h for h in restore_package_logger.handlers if isinstance(h, RichHandler)]
    assert len(rich_handlers) == 1


def test_encode_file_is_directory(tmp_path: Path):
    result = runner.invoke(app, ["encode", "--file", str(tmp_path)])
    assert result.exit_code == 1
    assert "failed to read" in result.stdout.lower()


def test_decode_output_unwritable(tmp_path: Path):
    result = runner.invoke(app, ["decode", "SGk-", "--output", str(tmp_path)])
    assert result.exit_code == 1
    assert "failed to write" in result.stdout.lower()
