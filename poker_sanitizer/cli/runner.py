from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config, resolve_config_path
from ..logging.init import log_summary, set_debug, setup_logging
from ..services.sanitizer import SanitizeError, default_output_path, sanitize_file
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- load .env (may set SANITIZER_CONFIG)
- load config (signatures, malformed policy, error log dir)
- read --file, drop rows with personal data, write --output
- print SUMMARY line

Exit codes: 0 success, 1 fatal, 3 malformed rows skipped (``skip`` policy).
argparse keeps its own code 2 for usage errors.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 3


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv. A missing file is not an error."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="poker-sanitizer",
        description="Remove rows carrying personal data (player hands) from a hand-history CSV",
        epilog="-f/--file and -o/--output name the input and output CSV. "
        "-o/--output is optional: without it the output is written beside the input "
        "as <name>_sanitized.<ext>.",
    )
    p.add_argument("-f", "--file", required=True, help="CSV file to sanitize (required)")
    p.add_argument(
        "-o",
        "--output",
        help="Output CSV (optional; default: <name>_sanitized.<ext> beside the input)",
    )
    p.add_argument("--config", help="YAML config (default: $SANITIZER_CONFIG or config/sanitizer.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] from tests must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    try:
        cfg = load_config(resolve_config_path(args.config))
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    logger.debug(
        f"config: signatures={sorted(cfg.personal_data_signatures)} policy={cfg.malformed_policy}"
    )

    try:
        output = Path(args.output) if args.output else default_output_path(args.file)
    except ValueError as e:
        logger.error(f"output: {e}")
        return EXIT_FATAL

    try:
        result = sanitize_file(
            args.file,
            output,
            rule=cfg.rule,
            malformed_policy=cfg.malformed_policy,
            error_log_dir=cfg.error_log_dir,
        )
    except SanitizeError as e:
        logger.error(f"sanitize: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))

    if result.partial:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
