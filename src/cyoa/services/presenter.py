"""Presentation port consumed by the adventure engine."""
from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from cyoa.core.types import DisplayStyle, EndingType
from cyoa.domain.defs import ChoiceDef


class Presenter(Protocol):
    """Renders story output and collects player decisions."""

    def show_welcome(self) -> None:
        ...

    def show_text(self, text: str, style: DisplayStyle = "normal") -> None:
        ...

    def show_title(self, text: str) -> None:
        ...

    def show_choices(self, choices: Sequence[ChoiceDef]) -> None:
        ...

    def clear(self) -> None:
        ...

    def show_stats(self, stats: Mapping[str, int], inventory: Sequence[str]) -> None:
        ...

    def show_ending(self, category: EndingType) -> None:
        ...

    async def ask_for_name(self) -> str:
        ...

    async def ask_for_choice(self, choices: Sequence[ChoiceDef]) -> int:
        """Return the zero-based index of the selected choice."""
        ...

    async def ask_play_again(self) -> bool:
        ...

    async def pause(self, message: str | None = None) -> None:
        ...
