"""Data models for tasks parsed from a TODO.md document."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Hashable, Iterator


@dataclass
class Task:
    """A single task node; owns its children."""

    id: Hashable = None
    name: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None
    comment: str | None = None
    is_completed: bool = False
    level: int = 0
    children: list[Task] = field(default_factory=list)

    @classmethod
    def root(cls) -> Task:
        """Sentinel parent whose children sit at level 0."""
        return cls(level=-1)

    @property
    def has_details(self) -> bool:
        return self.start_time is not None or self.end_time is not None or bool(self.comment)

    def add_child(self, child: Task) -> None:
        child.level = self.level + 1
        self.children.append(child)

    def walk(self) -> Iterator[Task]:
        """Yield this task and its descendants, parents before children."""
        stack = [self]
        while stack:
            task = stack.pop()
            yield task
            stack.extend(reversed(task.children))

    def to_dict(self) -> dict:
        d: dict = {
            "id": self.id,
            "name": self.name,
            "is_completed": self.is_completed,
            "level": self.level,
        }
        if self.start_time is not None:
            d["start_time"] = self.start_time.isoformat()
        if self.end_time is not None:
            d["end_time"] = self.end_time.isoformat()
        if self.comment:
            d["comment"] = self.comment
        d["children"] = [c.to_dict() for c in self.children]
        return d


@dataclass
class DetailRecord:
    """Fields collected under one `# <id>` header, before merging."""

    id: Hashable
    line_number: int = 0
    name: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    comment: str | None = None

    def apply_to(self, task: Task) -> None:
        """Copy descriptive fields onto a list-discovered task.

        The task's inline name is kept unless it is empty.
        """
        if not task.name and self.name:
            task.name = self.name
        task.start_time = self.start_time
        task.end_time = self.end_time
        task.comment = self.comment


@dataclass
class TaskDocument:
    """A complete parsed TODO.md document."""

    tasks: list[Task] = field(default_factory=list)
    source_path: str = ""
    orphan_ids: list[Hashable] = field(default_factory=list)

    def iter_tasks(self) -> Iterator[Task]:
        for task in self.tasks:
            yield from task.walk()

    @property
    def by_id(self) -> dict[Hashable, Task]:
        return {t.id: t for t in self.iter_tasks()}

    @property
    def completed(self) -> list[Task]:
        return [t for t in self.iter_tasks() if t.is_completed]
