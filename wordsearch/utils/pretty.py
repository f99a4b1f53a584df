"""Pretty-print helpers for word search grids and game snapshots."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from ..core.constants import StatusLevel

if TYPE_CHECKING:
    from ..core.models import RenderSnapshot
    from ..engine.generator import GenerationResult
    from ..engine.grid import LetterGrid


STATUS_PREFIX = {
    StatusLevel.INFO: "",
    StatusLevel.SUCCESS: "[ok] ",
    StatusLevel.ERROR: "[error] ",
}


def format_grid(grid: LetterGrid) -> str:
    width = grid.bounds.cols
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(grid.bounds.rows):
        row_render = " ".join(f"{grid.letter_at(r, c) or '.':>2}" for c in range(width))
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_board(snapshot: RenderSnapshot) -> str:
    """Render a snapshot: ``[X]`` selected, ``(X)`` found, ``*X*`` hinted."""

    selected = set(snapshot.selected)
    width = len(snapshot.letters[0]) if snapshot.letters else 0
    lines = [snapshot.stage_label]
    if width:
        lines.append("    " + "".join(f"{c:^4}" for c in range(width)))
        for r, row in enumerate(snapshot.letters):
            rendered = []
            for c, letter in enumerate(row):
                if (r, c) in selected:
                    rendered.append(f"[{letter}] ")
                elif (r, c) == snapshot.hint_cell:
                    rendered.append(f"*{letter}* ")
                elif (r, c) in snapshot.found_cells:
                    rendered.append(f"({letter}) ")
                else:
                    rendered.append(f" {letter}  ")
            lines.append(f"{r:>2} |" + "".join(rendered))
    if snapshot.words:
        words = [
            f"{entry.word.upper()}{' ✓' if entry.found else ''}" for entry in snapshot.words
        ]
        lines.append("Words: " + ", ".join(words))
    lines.append(f"Score: {snapshot.score}")
    lines.append(STATUS_PREFIX[snapshot.status.level] + snapshot.status.text)
    return "\n".join(lines)


def print_snapshot(snapshot: RenderSnapshot, *, stream=None) -> None:
    stream = stream or sys.stdout
    print(format_board(snapshot), file=stream)
    print(file=stream)


def print_generation_stats(result: GenerationResult, *, stream=None) -> None:
    """Print the grid followed by placement details."""

    stream = stream or sys.stdout
    print(format_grid(result.grid), file=stream)
    print(file=stream)
    print("--- Placements ---", file=stream)
    for word, placement in sorted(result.placements.items()):
        print(
            f"  {word.upper():<14} ({placement.start_row},{placement.start_col}) "
            f"{placement.direction.value}",
            file=stream,
        )
    if result.skipped:
        print(f"  Skipped:       {', '.join(result.skipped)}", file=stream)
