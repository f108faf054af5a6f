"""Formatting utilities for display values."""

from __future__ import annotations

# Native names for the languages the collection is known to use.
LANGUAGE_NAMES: dict[str, str] = {
    "bg": "Български",
    "en": "English",
    "fa": "فارسی",
    "fr": "Français",
    "ja": "日本語",
    "lzh": "文言",
    "ru": "Русский",
    "zh-Hans": "简体中文",
}


def language_name(code: str) -> str | None:
    return LANGUAGE_NAMES.get(code)


def format_language(code: str) -> str:
    """``"en · English"`` for known codes, the bare code otherwise."""
    name = language_name(code)
    return f"{code} · {name}" if name else code


def format_count_label(label: str, count: int) -> str:
    return f"{label} ({count})"


def format_byline(author: str, title: str) -> str:
    return f"{author} - {title}"


def truncate(text: str, max_len: int) -> str:
    if max_len < 1:
        return ""
    if len(text) <= max_len:
        return text
    if max_len <= 3:
        return text[:max_len]
    return text[: max_len - 3] + "..."
