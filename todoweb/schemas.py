from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Task:
    id: str = ""
    date: str = ""
    title: str = ""
    comment: str = ""
    repeat: str = ""
