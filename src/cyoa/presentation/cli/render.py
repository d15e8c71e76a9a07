"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Iterable, Mapping, Sequence

from cyoa.core.types import DisplayStyle, EndingType

ANSI_RESET = "\033[0m"
ANSI_CLEAR = "\033[2J\033[H"
DEFAULT_LINE_WIDTH = 78

STYLE_CODES: dict[str, str] = {
    "normal": "",
    "highlight": "\033[36m",
    "warning": "\033[33m",
    "success": "\033[32m",
    "error": "\033[31m",
    "heading": "\033[34m",
    "muted": "\033[90m",
}

_ENDING_BANNERS: dict[str, tuple[str, str, str]] = {
    "good": ("success", "CONGRATULATIONS!", "You achieved a good ending!"),
    "bad": ("error", "GAME OVER", "You reached a bad ending..."),
    "neutral": ("heading", "THE END", "You completed the adventure!"),
}


def debug_enabled() -> bool:
    """Return True only when CYOA_DEBUG is explicitly set to '1'."""
    return os.getenv("CYOA_DEBUG") == "1"


def stylize(text: str, style: DisplayStyle | str, *, color: bool = True) -> str:
    """Wrap text in the ANSI code for the style when colour is enabled."""
    code = STYLE_CODES.get(style, "")
    if not color or not code or not text:
        return text
    return f"{code}{text}{ANSI_RESET}"


def wrap_paragraphs(text: str, width: int = DEFAULT_LINE_WIDTH) -> list[str]:
    """
    Wrap text on word boundaries while keeping paragraph breaks.

    Blank lines in the input survive as empty strings in the output so that
    story text keeps its paragraph layout.
    """
    if width <= 0:
        return text.split("\n")
    lines: list[str] = []
    for paragraph in text.split("\n"):
        if not paragraph.strip():
            lines.append("")
            continue
        wrapped = textwrap.fill(
            paragraph,
            width=width,
            break_long_words=False,
            break_on_hyphens=False,
        )
        lines.extend(wrapped.split("\n"))
    return lines


def render_heading(title: str, *, color: bool = True) -> None:
    """Print a consistent section heading."""
    print(stylize(f"\n=== {title} ===", "heading", color=color))


def render_banner(title: str, *, color: bool = True) -> None:
    """Print a framed title banner."""
    border = "=" * (len(title) + 8)
    print(stylize(border, "highlight", color=color))
    print(stylize(f"    {title.upper()}    ", "highlight", color=color))
    print(stylize(border, "highlight", color=color))


def render_text(
    text: str,
    style: DisplayStyle = "normal",
    *,
    color: bool = True,
    width: int = DEFAULT_LINE_WIDTH,
) -> None:
    for line in wrap_paragraphs(text, width):
        print(stylize(line, style, color=color))


def render_choices(choices: Sequence[str], *, color: bool = True) -> None:
    """Display numbered story choices."""
    if not choices:
        return
    print()
    print(stylize("What do you choose?", "warning", color=color))
    for idx, label in enumerate(choices, start=1):
        print(f"{idx}. {label}")
    print()


def render_stats(
    stats: Mapping[str, int], inventory: Sequence[str], *, color: bool = True
) -> None:
    """Display the player's stats and inventory block."""
    print(stylize("\n--- Your Status ---", "heading", color=color))
    if stats:
        print(stylize("Stats:", "heading", color=color))
        for name, value in stats.items():
            print(f"  {name}: {value}")
    if inventory:
        print(stylize("Inventory:", "heading", color=color))
        render_bullet_lines(inventory, indent="  ")
    print(stylize("-------------------\n", "heading", color=color))


def render_ending(category: EndingType | str, *, color: bool = True) -> None:
    style, headline, detail = _ENDING_BANNERS.get(category, _ENDING_BANNERS["neutral"])
    print("\n" + "=" * 50)
    print(stylize(headline, style, color=color))
    print(stylize(detail, style, color=color))
    print("=" * 50 + "\n")


def render_bullet_lines(lines: Iterable[str], *, indent: str = "") -> None:
    """Print bullet-prefixed lines."""
    for line in lines:
        print(f"{indent}- {line}")


def clear_screen() -> None:
    print(ANSI_CLEAR, end="", flush=True)
