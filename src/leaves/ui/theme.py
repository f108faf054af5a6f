"""Theme colors for the reader."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Self

from leaves.config.paths import THEME_FILE


@dataclass
class ThemeColors:
    background: str = "#101010"
    foreground: str = "#ffffff"
    accent: str = "#f1c40f"
    selected_fg: str = "#000000"
    selected_bg: str = "#ffffff"
    heading: str = "#f1c40f"
    epigraph: str = "#aaaaaa"
    scrollbar: str = "#777777"
    border: str = "#444444"
    muted_text: str = "#999999"
    error: str = "#e74c3c"

    @classmethod
    def load(cls, path: Path = THEME_FILE) -> Self:
        theme = cls()

        if not path.exists():
            return theme

        with open(path, "rb") as f:
            data = tomllib.load(f)

        colors = data.get("colors", data)
        for f_info in fields(theme):
            if f_info.name in colors:
                setattr(theme, f_info.name, colors[f_info.name])

        return theme

    def save(self, path: Path = THEME_FILE) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = ["[colors]"]
        for f_info in fields(self):
            value = getattr(self, f_info.name)
            lines.append(f'{f_info.name} = "{value}"')
        lines.append("")
        path.write_text("\n".join(lines))


_theme: ThemeColors | None = None


def get_theme() -> ThemeColors:
    global _theme
    if _theme is None:
        _theme = ThemeColors.load()
    return _theme
