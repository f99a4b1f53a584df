"""CLI entrypoint for the word search game."""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from wordsearch.core.constants import DEFAULT_GRID_SIZE, TransitionKind
from wordsearch.data.progress import DEFAULT_PROGRESS_PATH, JsonProgressStore
from wordsearch.data.stages import FileStageProvider, HttpStageProvider, StageProvider
from wordsearch.engine.controller import GameConfig, GameController
from wordsearch.engine.generator import GeneratorConfig, GridGenerator
from wordsearch.utils.logger import configure_logging
from wordsearch.utils.pretty import print_generation_stats, print_snapshot

HELP_TEXT = """Commands:
  <row> <col>   toggle a cell
  hint          highlight the first letter of a hidden word
  clear         clear the current selection
  new           skip to the next stage
  reset         replay the current stage on a new grid
  restart       forget all progress and start over
  quit          leave the game"""

BLOCKING_TRANSITIONS = (TransitionKind.STAGE_ADVANCE, TransitionKind.PROGRESS_RESET)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play a word search game in the terminal")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--stages-url", type=str, help="URL of the stage list JSON")
    source.add_argument("--stages-file", type=Path, help="Local stage list JSON file")
    parser.add_argument(
        "--progress-file",
        type=Path,
        default=DEFAULT_PROGRESS_PATH,
        help="Where the current stage and score are saved",
    )
    parser.add_argument("--size", type=int, default=DEFAULT_GRID_SIZE, help="Grid size in cells")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Generate a single grid for these words and exit",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output (with --words)")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def generate_once(args: argparse.Namespace) -> None:
    generator = GridGenerator(GeneratorConfig(size=args.size, seed=args.seed))
    result = generator.generate(args.words)
    payload: Dict[str, Any] = {
        "size": result.grid.size,
        "rows": ["".join(row) for row in result.grid.letters()],
        "placements": [
            {
                "word": placement.word,
                "start": [placement.start_row, placement.start_col],
                "direction": placement.direction.value,
                "cells": [list(cell) for cell in placement.cells],
            }
            for placement in result.placements.values()
        ],
        "skipped": result.skipped,
    }
    if args.output:
        args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        print_generation_stats(result)
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=2))


def wait_for_transitions(controller: GameController) -> None:
    """Sleep through stage-advance and reset delays so the next board is shown."""

    while any(controller.scheduler.is_pending(kind) for kind in BLOCKING_TRANSITIONS):
        next_due = controller.scheduler.next_due()
        if next_due is not None:
            time.sleep(max(next_due - controller.scheduler.clock(), 0.0))
        controller.tick()


def handle_command(controller: GameController, line: str) -> bool:
    """Apply one typed command; returns False when the player quits."""

    parts = line.split()
    if not parts:
        return True
    command = parts[0].lower()
    if command in {"quit", "exit", "q"}:
        return False
    if command == "help":
        print(HELP_TEXT)
    elif command == "hint":
        controller.hint()
    elif command == "clear":
        controller.clear_selection()
    elif command == "new":
        controller.new_stage()
    elif command == "reset":
        controller.reset_stage()
    elif command == "restart":
        controller.reset_all_progress()
    elif len(parts) == 2 and all(part.lstrip("-").isdigit() for part in parts):
        controller.select(int(parts[0]), int(parts[1]))
    else:
        print(f"Unknown command: {line.strip()!r} (type 'help')")
    return True


def play(args: argparse.Namespace) -> int:
    provider: StageProvider
    if args.stages_file:
        provider = FileStageProvider(args.stages_file)
    else:
        provider = HttpStageProvider(url=args.stages_url)

    config = GameConfig(grid_size=args.size, seed=args.seed)
    controller = GameController(
        store=JsonProgressStore(args.progress_file),
        config=config,
        rng=random.Random(args.seed),
    )
    controller.subscribe(print_snapshot)
    if not controller.initialize(provider):
        return 1

    print(HELP_TEXT)
    while True:
        try:
            line = input("> ")
        except EOFError:
            break
        controller.tick()
        if not handle_command(controller, line):
            break
        wait_for_transitions(controller)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    if args.size < 1:
        parser.error("--size must be positive")
    if args.output and not args.words:
        parser.error("--output requires --words")

    if args.words:
        generate_once(args)
        return 0
    return play(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
