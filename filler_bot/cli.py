"""Command-line entry point: ``filler-bot`` / ``python -m filler_bot``.

The referee launches the bot as a subprocess, writes turns to its stdin and
reads one ``"x y"`` line per turn from its stdout. All diagnostics go to
stderr and the two log files in ``--log-dir``.
"""

from __future__ import annotations

import argparse
import os
import sys

from .ai.factory import BotFactory
from .config import load_bot_config
from .driver import TurnDriver
from .errors import ConfigurationError
from .logging_config import close_diagnostic_logs, setup_diagnostic_logs, setup_logging
from .models import BlockingVariant
from .viewer import BoardViewer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filler-bot",
        description="Filler bot speaking the Anfield/Piece protocol on stdin/stdout",
    )
    parser.add_argument(
        "--strategy",
        help=f"Move selection strategy ({', '.join(BotFactory.available())})",
    )
    parser.add_argument(
        "--profile",
        dest="weight_profile_id",
        help="Weight profile for the composite strategy",
    )
    parser.add_argument(
        "--blocking-variant",
        choices=[v.value for v in BlockingVariant],
        help="Neighbourhood used by the blocking score",
    )
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument(
        "--viewer",
        action="store_true",
        default=None,
        help="Show the board in a live window (needs pygame)",
    )
    parser.add_argument("--log-dir", help="Directory for the diagnostic logs")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console (stderr) log level",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logger = setup_logging(
        "filler_bot",
        level=args.log_level or os.getenv("FILLER_BOT_LOG_LEVEL", "INFO"),
    )

    overrides = {
        "strategy": args.strategy,
        "weight_profile_id": args.weight_profile_id,
        "blocking_variant": args.blocking_variant,
        "viewer": args.viewer,
        "log_dir": args.log_dir,
        "log_level": args.log_level,
    }
    try:
        config = load_bot_config(args.config, overrides=overrides)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2
    setup_logging("filler_bot", level=config.log_level)

    turn_filter = setup_diagnostic_logs(
        config.log_dir, config.input_log, config.decision_log
    )

    viewer = None
    if config.viewer:
        viewer = BoardViewer()
        viewer.start()

    try:
        return TurnDriver(config, viewer=viewer, turn_filter=turn_filter).run(
            sys.stdin, sys.stdout
        )
    finally:
        if viewer is not None:
            viewer.close()
        close_diagnostic_logs()


if __name__ == "__main__":
    sys.exit(main())
