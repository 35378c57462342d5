from __future__ import annotations

import argparse
import logging
import sys

from apps.sidecar.config import LOG_LEVELS, SidecarSettings, ValidationMode
from apps.sidecar.server import SidecarStdioServer

__all__ = ["create_parser", "main", "parse_args", "resolve_settings"]


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the mock device sidecar over STDIO (one JSON object per line)"
    )
    parser.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        type=str.upper,
        default=None,
        help="Logging level for diagnostics on stderr (env: SIDECAR_LOG_LEVEL)",
    )
    parser.add_argument(
        "--max-line-bytes",
        type=int,
        default=None,
        help="Longest accepted request line in bytes (env: SIDECAR_MAX_LINE_BYTES)",
    )
    parser.add_argument(
        "--response-validation",
        choices=[mode.value for mode in ValidationMode],
        default=None,
        help="Check responses against the JSON schema and log mismatches "
        "(env: SIDECAR_RESPONSE_VALIDATION)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        default=None,
        help="Answer a single request and exit",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return create_parser().parse_args(argv)


def resolve_settings(args: argparse.Namespace) -> SidecarSettings:
    """Merge environment configuration with explicit CLI flags."""

    return SidecarSettings.from_env().with_overrides(
        log_level=args.log_level,
        max_line_bytes=args.max_line_bytes,
        response_validation=args.response_validation,
        once=args.once,
    )


def main(argv: list[str] | None = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    try:
        settings = resolve_settings(args)
    except ValueError as exc:
        parser.error(str(exc))
    logging.basicConfig(level=getattr(logging, settings.log_level), stream=sys.stderr)
    server = SidecarStdioServer(settings=settings)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        return 0
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
