"""Command-line entry point for the title normalizer."""

import argparse
import sys
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from dotenv import load_dotenv

from title_normalizer.config.environment import EnvironmentConfig, load_environment_config
from title_normalizer.config.exceptions import ConfigurationError
from title_normalizer.config.loader import load_config
from title_normalizer.config.models import AppConfig
from title_normalizer.logging import get_logger
from title_normalizer.logging.config import configure_logging
from title_normalizer.logging.context import log_context
from title_normalizer.normalization import NormalizationResult, Normalizer

logger = get_logger(__name__, component="cli")

NO_MATCH = "No Match"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="title-normalizer",
        description="Map free-text job titles to canonical titles",
    )
    parser.add_argument(
        "titles",
        nargs="*",
        help="Job titles to normalize (read one per line from stdin if omitted)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a YAML configuration file (default: title_normalizer.yaml if present)",
    )
    parser.add_argument(
        "--allow-typos",
        action="store_true",
        default=None,
        help="Enable typo-tolerant word matching",
    )
    parser.add_argument(
        "--clean-special-chars",
        action="store_true",
        default=None,
        help="Strip punctuation from synonyms and input",
    )
    parser.add_argument(
        "--no-defaults",
        action="store_true",
        help="Do not merge the built-in vocabulary",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        metavar="N",
        help="Print the N best-scoring candidates for each input",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print how each token contributed to the scores",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def load_runtime_config(args: argparse.Namespace) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and apply overrides.

    Priority for every setting: CLI flag > environment > config file > default.

    Raises:
        ConfigurationError: If the config file or environment is invalid
    """
    app_config = load_config(args.config)
    env_config = load_environment_config()

    matching = app_config.matching
    for field_name, cli_value in (
        ("allow_typos", args.allow_typos),
        ("clean_special_characters", args.clean_special_chars),
    ):
        env_value = getattr(env_config, field_name)
        if cli_value is not None:
            setattr(matching, field_name, cli_value)
        elif env_value is not None:
            setattr(matching, field_name, env_value)

    if args.no_defaults:
        matching.include_defaults = False

    if args.log_level:
        env_config.log_level = args.log_level
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    if not env_config.log_format:
        env_config.log_format = app_config.logging.format

    if args.top is not None and args.top < 1:
        raise ConfigurationError(f"--top must be at least 1, got {args.top}")

    return app_config, env_config


def read_inputs(args: argparse.Namespace, stdin=None) -> Iterable[str]:
    """Yield titles from the command line, or non-blank stdin lines."""
    if args.titles:
        yield from args.titles
        return

    for line in stdin or sys.stdin:
        line = line.rstrip("\n")
        if line.strip():
            yield line


def format_result(result: NormalizationResult, top: Optional[int] = None, explain: bool = False) -> List[str]:
    """Render one result as output lines."""
    lines = [f"{result.input_text} -> {result.title or NO_MATCH}"]

    if top:
        if result.is_exact:
            lines.append(f"  1. {result.title} (exact)")
        for position, (title, score) in enumerate(result.candidates[:top], 1):
            lines.append(f"  {position}. {title} ({score})")

    if explain and result.scoring is not None:
        for token_match in result.scoring.token_matches:
            synonyms = ", ".join(sorted(token_match.synonym_titles)) or "-"
            words = ", ".join(sorted(token_match.word_titles)) or "-"
            lines.append(
                f"  token '{token_match.token}': synonym [{synonyms}] "
                f"{token_match.strategy.value} [{words}]"
            )
        for title, bonus in sorted(result.scoring.bonuses.items()):
            lines.append(f"  consecutive bonus {title}: +{bonus}")

    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the title normalizer CLI.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args)
        configure_logging(
            level=env_config.log_level,
            format_type=env_config.log_format,
            environment=env_config.environment,
        )

        logger.info(
            "Title normalizer starting",
            extra={
                "event": "cli.starting",
                "config_path": str(args.config) if args.config else None,
                "configured_titles": len(app_config.titles),
                "allow_typos": app_config.matching.allow_typos,
                "clean_special_characters": app_config.matching.clean_special_characters,
            },
        )

        normalizer = Normalizer.from_config(app_config)

        matched = 0
        total = 0
        for input_title in read_inputs(args):
            with log_context(input_title=input_title):
                result = normalizer.explain(input_title)
            total += 1
            matched += int(result.is_match)
            for line in format_result(result, top=args.top, explain=args.explain):
                print(line)

        logger.info(
            f"Normalized {total} title(s), {matched} matched",
            extra={"event": "cli.completed", "total": total, "matched": matched},
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e.message}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
