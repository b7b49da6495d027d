"""
=============================================================================
COMMAND LINE: INSPECT AND BUILD RAW HTTP MESSAGES
=============================================================================

    python -m httpcodec request dump.http       # parse a captured request
    python -m httpcodec response < reply.http   # parse a response from stdin
    python -m httpcodec build --status 201 --text Created \\
        -H "Content-Type: application/json" --body '{"id": 1}'

Parsed messages are printed as JSON. A message that fails to parse is
reported on stderr with the error class name, and the exit status is 1.
=============================================================================
"""

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any, BinaryIO, Dict, Optional

from . import __version__
from .config import CodecConfig, LOG_LEVELS
from .http import (
    HTTPParseError,
    HTTPRequest,
    HTTPResponse,
    RequestParser,
    ResponseBuilder,
    ResponseParser,
)


logger = logging.getLogger("httpcodec.cli")


def _setup_logging(config: CodecConfig) -> None:
    """Configure the root logger the same way for every subcommand."""
    logging.basicConfig(
        level=config.logging_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger("httpcodec").setLevel(config.logging_level)


def _describe_body(body: bytes) -> Dict[str, Any]:
    summary: Dict[str, Any] = {"body_length": len(body)}
    try:
        summary["body"] = body.decode("utf-8")
    except UnicodeDecodeError:
        summary["body"] = None  # binary, length only
    return summary


def describe_request(request: HTTPRequest) -> Dict[str, Any]:
    """JSON-friendly view of a parsed request."""
    return {
        "method": request.method.value,
        "target": request.target,
        "version": request.version.value,
        "headers": request.headers.to_dict(),
        **_describe_body(request.body),
    }


def describe_response(response: HTTPResponse) -> Dict[str, Any]:
    """JSON-friendly view of a parsed response."""
    return {
        "version": response.version.value,
        "status_code": response.status_code,
        "status_text": response.status_text,
        "headers": response.headers.to_dict(),
        **_describe_body(response.body),
    }


def _parse_header_arg(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected 'Name: value', got {raw!r}")
    return name.strip(), value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpcodec",
        description="Parse and build raw HTTP/1.1 messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  httpcodec request dump.http
  printf 'HTTP/1.1 204 No Content\\r\\n\\r\\n' | httpcodec response
  httpcodec build --status 404 --body "not here"
        """,
    )
    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: HTTPCODEC_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"httpcodec {__version__}",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    for name, what in (("request", "request"), ("response", "response")):
        cmd = sub.add_parser(name, help=f"Parse a raw HTTP {what} and print it as JSON")
        cmd.add_argument(
            "file",
            nargs="?",
            default=None,
            help="File holding the raw message (default: stdin)",
        )

    build = sub.add_parser("build", help="Build a response and write its wire bytes")
    build.add_argument("--status", "-s", type=int, default=200, help="Status code (default: 200)")
    build.add_argument("--text", "-t", default=None, help="Reason phrase (default: registered phrase)")
    build.add_argument(
        "--header", "-H",
        dest="headers",
        action="append",
        type=_parse_header_arg,
        default=[],
        help="Header as 'Name: value' (repeatable)",
    )
    build.add_argument("--body", "-b", default=None, help="Response body")

    return parser


def _open_input(path: Optional[str]) -> BinaryIO:
    if path is None:
        return sys.stdin.buffer
    return open(path, "rb")


def _run_parse(command: str, path: Optional[str], config: CodecConfig) -> int:
    try:
        stream = _open_input(path)
    except OSError as e:
        logger.error(f"Cannot open {path}: {e}")
        print(f"error: cannot open {path}: {e}", file=sys.stderr)
        return 2

    try:
        if command == "request":
            summary = describe_request(RequestParser(config).parse(stream))
        else:
            summary = describe_response(ResponseParser(config).parse(stream))
    except HTTPParseError as e:
        logger.warning(f"Failed to parse {command}: {type(e).__name__}: {e}")
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1
    finally:
        if path is not None:
            stream.close()

    print(json.dumps(summary, indent=2, ensure_ascii=False))
    return 0


def _run_build(args: argparse.Namespace) -> int:
    builder = ResponseBuilder().status(args.status, args.text)
    for name, value in args.headers:
        builder.header(name, value)
    if args.body is not None:
        builder.body(args.body)

    sys.stdout.buffer.write(builder.to_bytes())
    sys.stdout.buffer.flush()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        config = CodecConfig.from_env()
        if args.log_level:
            config = dataclasses.replace(config, log_level=args.log_level)
        config.validate()
    except ValueError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2

    _setup_logging(config)

    if args.command == "build":
        return _run_build(args)
    return _run_parse(args.command, args.file, config)


if __name__ == "__main__":
    sys.exit(main())
