# coding: utf-8
from __future__ import annotations

from .collector import DirEntry


def entry_key(entry: DirEntry) -> tuple[bool, bytes]:
    # folders first, then plain bytewise order (like strcmp)
    return (not entry.is_dir, entry.name)


def sort_entries(entries: list[DirEntry]) -> list[DirEntry]:
    entries.sort(key=entry_key)
    return entries
