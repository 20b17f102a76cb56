# b64url/cli/main.py
"""
CLI for encoding and decoding Base64URL text, raw files and JSON values.
"""

import json
import logging
import os
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from b64url.core.codec import decode, decode_json, decode_to_string, encode, encode_json
from b64url.core.errors import Base64URLError
from b64url.core.logging import configure, get_logger

app = typer.Typer(
    name="b64url",
    help="Encode and decode URL-safe Base64 (no padding) text, files and JSON",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
logger = get_logger(__name__)

FALSE_VALUES = {"0", "false", "no", "off"}


def get_strict_mode(strict_flag: Optional[bool] = None) -> bool:
    """Resolve decode strictness in this order:
    1. --strict / --lenient flag
    2. B64URL_STRICT environment variable
    3. Default: strict
    """
    if strict_flag is not None:
        return strict_flag
    env_value = os.environ.get("B64URL_STRICT")
    if env_value is not None:
        return env_value.strip().lower() not in FALSE_VALUES
    return True


def get_text_errors(errors_flag: Optional[str] = None) -> str:
    """Resolve the UTF-8 error handler: --errors flag, then B64URL_TEXT_ERRORS, then "strict"."""
    if errors_flag:
        return errors_flag
    return os.environ.get("B64URL_TEXT_ERRORS") or "strict"


def fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/]", soft_wrap=True)
    raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Base64URL codec tools."""
    if verbose:
        configure(level=logging.DEBUG, handler=RichHandler(console=Console(stderr=True), show_path=False))
        logger.debug("Debug logging enabled")


@app.command("encode")
def encode_cmd(
    text: Optional[str] = typer.Argument(None, help="Text to encode (UTF-8)"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Encode the raw bytes of this file instead"),
):
    """Encode text or a file's bytes to Base64URL."""
    if file is not None:
        if not file.exists():
            fail(f"File not found: {file}")
        try:
            data = file.read_bytes()
        except OSError as e:
            fail(f"Failed to read {file}: {e}")
        logger.debug("Encoding %d bytes from %s", len(data), file)
        console.print(encode(data), soft_wrap=True, highlight=False)
        return

    if text is None:
        fail("Nothing to encode: pass TEXT or --file")
    console.print(encode(text), soft_wrap=True, highlight=False)


@app.command("decode")
def decode_cmd(
    token: str = typer.Argument(..., help="Base64URL text to decode"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write decoded bytes to this file"),
    strict: Optional[bool] = typer.Option(None, "--strict/--lenient", help="Reject characters outside the URL-safe alphabet"),
    errors: Optional[str] = typer.Option(None, "--errors", help="UTF-8 error handler for text output (strict, replace, ...)"),
):
    """Decode Base64URL text and print it, or write the raw bytes to a file."""
    strict_mode = get_strict_mode(strict)

    try:
        if output is not None:
            data = decode(token, strict=strict_mode)
            output.write_bytes(data)
            console.print(f"[green]Wrote {len(data)} bytes to {output}[/]")
            return
        text = decode_to_string(token, strict=strict_mode, errors=get_text_errors(errors))
    except Base64URLError as e:
        fail(f"Decode failed: {e}")
    except LookupError as e:
        fail(f"Unknown error handler: {e}")
    except OSError as e:
        fail(f"Failed to write {output}: {e}")

    console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


@app.command("encode-json")
def encode_json_cmd(
    json_text: str = typer.Argument(..., help="JSON document to encode"),
    canonical: bool = typer.Option(False, "--canonical", help="Serialize with RFC 8785 (JCS) before encoding"),
):
    """Parse a JSON document and encode it compactly (like a JWT header or payload)."""
    try:
        value = json.loads(json_text)
    except json.JSONDecodeError as e:
        fail(f"Invalid JSON input: {e.msg}")

    try:
        console.print(encode_json(value, canonical=canonical), soft_wrap=True, highlight=False)
    except Base64URLError as e:
        fail(f"Encode failed: {e}")


@app.command("decode-json")
def decode_json_cmd(
    token: str = typer.Argument(..., help="Base64URL-encoded JSON"),
    strict: Optional[bool] = typer.Option(None, "--strict/--lenient", help="Reject characters outside the URL-safe alphabet"),
):
    """Decode Base64URL text and pretty-print the JSON inside."""
    try:
        value = decode_json(token, strict=get_strict_mode(strict))
    except Base64URLError as e:
        fail(f"Decode failed: {e}")

    console.print_json(data=value)


if __name__ == "__main__":
    app()
