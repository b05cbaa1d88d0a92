"""
Task model — nodes of the host task graph.

The graph is stored as prerequisite names on each task. Edges are
only ever added.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Task(BaseModel):
    """A named unit of build work."""

    name: str
    group: str = ""
    description: str = ""
    enabled: bool = True
    prerequisites: list[str] = Field(default_factory=list)

    def depends_on(self, *tasks: Task | str) -> None:
        """Add prerequisite edges; existing edges are kept as-is."""
        for task in tasks:
            name = task if isinstance(task, str) else task.name
            if name not in self.prerequisites:
                self.prerequisites.append(name)

    def has_prerequisite(self, task: Task | str) -> bool:
        name = task if isinstance(task, str) else task.name
        return name in self.prerequisites
