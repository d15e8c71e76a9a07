"""Console entry point: argument parsing, story loading and the play session."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import signal
import sys
from typing import Sequence

from cyoa import __version__
from cyoa.data.errors import DataError
from cyoa.data.repositories import StoryRepository
from cyoa.data.repositories.story_repo import DEFAULT_STORY_ID
from cyoa.domain.defs import AdventureStoryDef
from cyoa.presentation.cli import render
from cyoa.presentation.cli.config import load_config
from cyoa.presentation.cli.console_presenter import ConsolePresenter
from cyoa.services import (
    AdventureEngine,
    EngineError,
    ValidationOptions,
    get_statistics,
    validate_story,
)

logger = logging.getLogger(__name__)

INTERRUPT_FAREWELL = "\n\nThanks for playing! Adventure awaits another day..."
TERMINATE_FAREWELL = "\n\nAdventure interrupted. Until next time!"

_DESCRIPTION = (
    "CLI Adventure Game - an interactive text-based adventure where your choices "
    "matter. Navigate the story, make crucial decisions, and discover multiple "
    "endings based on your actions."
)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the interactive CLI session and return the exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.debug or render.debug_enabled())
    _install_signal_handlers()

    story_repo = StoryRepository(args.definitions)
    try:
        if args.list_stories:
            _print_story_list(story_repo)
            return 0
        story = story_repo.get(args.story)
    except KeyError:
        print(f"Unknown story '{args.story}'. Use --list-stories to see options.", file=sys.stderr)
        return 1
    except DataError as exc:
        print(f"Unable to load stories: {exc}", file=sys.stderr)
        return 1

    if args.validate:
        return _print_validation(story)

    config = load_config()
    presenter = ConsolePresenter(
        color=config.color and not args.no_color,
        clear_screen=config.clear_screen,
    )
    try:
        engine = AdventureEngine(story, presenter, strict=True)
        asyncio.run(engine.play())
    except (KeyboardInterrupt, EOFError):
        print(INTERRUPT_FAREWELL)
        return 0
    except EngineError as exc:
        logger.debug("Adventure aborted", exc_info=True)
        print(f"An error occurred: {exc}", file=sys.stderr)
        return 1
    print("Thanks for playing!")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cyoa", description=_DESCRIPTION)
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"CLI Adventure Game v{__version__}",
    )
    parser.add_argument(
        "--story",
        default=DEFAULT_STORY_ID,
        help=f"Story id to play (default: {DEFAULT_STORY_ID}).",
    )
    parser.add_argument(
        "--definitions",
        default=None,
        help="Directory containing stories.json (default: bundled stories).",
    )
    parser.add_argument("--list-stories", action="store_true", help="List available stories and exit.")
    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate the selected story, print a report and exit.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging.")
    parser.add_argument("--no-color", action="store_true", help="Disable coloured output.")
    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _install_signal_handlers() -> None:
    signal.signal(signal.SIGINT, _handle_signal)
    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, _handle_signal)


def _handle_signal(signum, frame) -> None:
    farewell = INTERRUPT_FAREWELL
    if signum == getattr(signal, "SIGTERM", None):
        farewell = TERMINATE_FAREWELL
    print(farewell, flush=True)
    # A prompt may hold a worker thread in input(); exit without joining it.
    os._exit(0)


def _print_story_list(story_repo: StoryRepository) -> None:
    render.render_heading("Stories", color=False)
    for story in story_repo.all():
        print(f"{story.id}: {story.title}")


def _print_validation(story: AdventureStoryDef) -> int:
    result = validate_story(story, ValidationOptions(check_unreachable_nodes=True))
    stats = get_statistics(story)
    render.render_heading(f"Validation: {story.title}", color=False)
    print(result.report())
    render.render_heading("Statistics", color=False)
    render.render_bullet_lines(
        [
            f"Nodes: {stats.total_nodes}",
            f"Choices: {stats.total_choices}",
            f"Endings: {stats.ending_nodes}",
            f"Average choices per node: {stats.average_choices_per_node:.2f}",
        ]
    )
    return 0 if result.is_valid else 1
