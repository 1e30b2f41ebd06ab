"""Command Line — strike, verify and serve entry points.

Exit codes:
    0  Strike committed / substrate PASS
    1  Contamination, invalid input, unsafe path, I/O failure, missing executor
"""

import argparse
import json
import logging
import sys

from dotmatrix.config import get_settings
from dotmatrix.core.errors import (
    ByteValidationError, DotMatrixError, ExecutorUnavailableError, FormatError,
)
from dotmatrix.infrastructure.observability import setup_logging
from dotmatrix.services import byte_input, strike_service

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _print_contaminants(contaminants) -> None:
    for c in contaminants:
        print(
            f"  position {c.position}: 0x{c.value:02X} - {c.description}",
            file=sys.stderr,
        )


def _print_error(error: DotMatrixError, as_json: bool) -> None:
    if as_json:
        print(json.dumps(error.to_response(), indent=2))
        return
    print(f"ERROR: {error.message}", file=sys.stderr)
    if isinstance(error, ByteValidationError):
        _print_contaminants(error.contaminants)


def cmd_strike(args: argparse.Namespace) -> int:
    settings = get_settings()
    parsed = byte_input.parse_byte_string(args.bytes, settings.alphabet())
    if not parsed.ok:
        _print_error(
            FormatError(parsed.message, parsed.code.value, parsed.position), args.json,
        )
        return EXIT_FAILURE

    if not strike_service.check_available(settings):
        root = settings.substrate_root or "."
        _print_error(ExecutorUnavailableError(root), args.json)
        return EXIT_FAILURE

    path = args.output or settings.default_target
    try:
        report = strike_service.execute_strike(
            parsed.value, path, overwrite=args.force, settings=settings,
        )
    except DotMatrixError as e:
        _print_error(e, args.json)
        return EXIT_FAILURE

    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print(f"Struck {report.strike_count} byte(s) to {report.path}")
        print(f"Hex: {report.hex}")
    return EXIT_OK


def cmd_verify(args: argparse.Namespace) -> int:
    settings = get_settings()
    path = args.path or settings.default_target
    try:
        result = strike_service.verify_substrate(path, settings=settings)
    except DotMatrixError as e:
        _print_error(e, args.json)
        return EXIT_FAILURE

    if args.json:
        print(result.model_dump_json(indent=2))
    else:
        print(f"Verifying {path} ({result.size} bytes)")
        if result.hexdump:
            print(result.hexdump)
        if result.clean:
            print("PASS: Substrate is clean.")
        else:
            print(f"FAIL: {len(result.contaminants)} contaminant(s) detected")
            _print_contaminants(result.contaminants)
    return EXIT_OK if result.clean else EXIT_FAILURE


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "dotmatrix.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        log_level=settings.log_level.lower(),
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotmatrix",
        description="Alphabet-enforced substrate striker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--json", action="store_true", help="JSON output")
    sub = parser.add_subparsers(dest="command", required=True)

    strike = sub.add_parser("strike", help="Write a byte list to a substrate")
    strike.add_argument("bytes", help='Comma-separated decimal bytes, e.g. "104,101,108"')
    strike.add_argument("-o", "--output", help="Target path (default from settings)")
    strike.add_argument(
        "--force", action="store_true", help="Replace an existing target file",
    )
    strike.set_defaults(func=cmd_strike)

    verify = sub.add_parser("verify", help="Re-read a substrate and check every byte")
    verify.add_argument("path", nargs="?", help="Substrate path (default from settings)")
    verify.set_defaults(func=cmd_verify)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
