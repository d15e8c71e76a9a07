"""Terminal implementation of the engine's presenter port."""
from __future__ import annotations

import asyncio
import sys
from typing import Mapping, Sequence

from cyoa.core.types import DisplayStyle, EndingType
from cyoa.domain.defs import ChoiceDef
from cyoa.presentation.cli import render

DEFAULT_PAUSE_MESSAGE = "Press Enter to continue..."
_YES = {"y", "yes"}
_NO = {"n", "no"}


async def read_input(prompt: str = "") -> str:
    return await asyncio.to_thread(input, prompt)


class ConsolePresenter:
    """Prints story output to stdout and reads answers from stdin."""

    def __init__(self, *, color: bool = True, clear_screen: bool = True) -> None:
        self._color = color
        self._clear_screen = clear_screen

    def show_welcome(self) -> None:
        self.clear()
        self.show_title("Adventure")
        self.show_text("Welcome to the CLI Adventure Game!", "highlight")
        self.show_text("An interactive text-based adventure where your choices matter.\n")

    def show_text(self, text: str, style: DisplayStyle = "normal") -> None:
        render.render_text(text, style, color=self._color)

    def show_title(self, text: str) -> None:
        render.render_banner(text, color=self._color)

    def show_choices(self, choices: Sequence[ChoiceDef]) -> None:
        render.render_choices([choice.text for choice in choices], color=self._color)

    def clear(self) -> None:
        if self._clear_screen and sys.stdout.isatty():
            render.clear_screen()

    def show_stats(self, stats: Mapping[str, int], inventory: Sequence[str]) -> None:
        render.render_stats(stats, inventory, color=self._color)

    def show_ending(self, category: EndingType) -> None:
        render.render_ending(category, color=self._color)

    async def ask_for_name(self) -> str:
        while True:
            name = (await read_input("What is your name, brave adventurer? ")).strip()
            if name:
                return name
            self.show_text("Please enter a valid name.", "warning")

    async def ask_for_choice(self, choices: Sequence[ChoiceDef]) -> int:
        choice_count = len(choices)
        while True:
            raw = (await read_input("Select your choice: ")).strip()
            try:
                index = int(raw) - 1
            except ValueError:
                self.show_text("Please enter a number.", "warning")
                continue
            if 0 <= index < choice_count:
                return index
            self.show_text(f"Please enter a value between 1 and {choice_count}.", "warning")

    async def ask_play_again(self) -> bool:
        while True:
            raw = (await read_input("Would you like to play again? [Y/n] ")).strip().lower()
            if not raw or raw in _YES:
                return True
            if raw in _NO:
                return False
            self.show_text("Please answer 'y' or 'n'.", "warning")

    async def pause(self, message: str | None = None) -> None:
        prompt = render.stylize(message or DEFAULT_PAUSE_MESSAGE, "muted", color=self._color)
        await read_input(prompt)
