"""Command line entry point: a headless AI-vs-AI match."""

from __future__ import annotations

import argparse
import logging
import random
import sys
from collections.abc import Sequence

from tempochess import __version__
from tempochess.config import DEFAULT_SETTINGS, ConfigError, load_settings
from tempochess.core.enums import Color

_LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tempochess",
        description="Play a real-time Tempo Chess match between two AI opponents.",
    )
    parser.add_argument("--white-rating", type=int, default=None, metavar="N")
    parser.add_argument("--black-rating", type=int, default=None, metavar="N")
    parser.add_argument("--seed", type=int, default=None, help="seed the AI randomness")
    parser.add_argument("--config", default=None, help="YAML settings file")
    parser.add_argument(
        "--time-limit",
        type=float,
        default=300.0,
        metavar="SECONDS",
        help="stop the match after this much wall time (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run one match and print the result."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = load_settings(args.config) if args.config else DEFAULT_SETTINGS
    except (OSError, ConfigError) as exc:
        print(f"tempochess: {exc}", file=sys.stderr)
        return 2

    from PyQt6.QtCore import QCoreApplication, QTimer

    from tempochess.driver.match import MatchSession

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    default_rating = settings.ai.default_rating
    match = MatchSession(
        {
            Color.WHITE: args.white_rating or default_rating,
            Color.BLACK: args.black_rating or default_rating,
        },
        settings=settings,
        rng=random.Random(args.seed),
    )
    controller = match.controller
    controller.events.on_game_over.append(
        lambda _status, _winner: QTimer.singleShot(0, app.quit)
    )
    QTimer.singleShot(int(args.time_limit * 1000), app.quit)

    match.start()
    app.exec()
    match.stop()

    state = controller.state
    for record in state.move_history:
        tag = "AI" if record.is_ai else "  "
        print(f"{record.time_label:>7}s {tag} {record.color!s:<5} {record.notation}")
    if state.winner is not None:
        print(f"{state.winner} wins after {len(state.move_history)} moves")
    else:
        print(f"No result after {state.clock.elapsed_seconds:.1f}s")
    _LOGGER.info("Match finished: %s", state.status.name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
