"""
Source set model — named groups of source directories.

A source set owns its primary ``java`` sources and its ``resources``,
plus named extension directory sets that plugins attach for other
source kinds.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class SourceDirectorySet(BaseModel):
    """An ordered set of source directories, relative to the project dir."""

    name: str
    display_name: str = ""
    src_dirs: list[Path] = Field(default_factory=list)

    def src_dir(self, path: str | Path) -> bool:
        """Add a directory. Returns False if it was already registered."""
        path = Path(path)
        if path in self.src_dirs:
            return False
        self.src_dirs.append(path)
        return True

    def files(self, base_dir: Path) -> list[Path]:
        """Every regular file below the registered directories that exist."""
        found: list[Path] = []
        for src in self.src_dirs:
            root = src if src.is_absolute() else base_dir / src
            if not root.is_dir():
                continue
            found.extend(sorted(p for p in root.rglob("*") if p.is_file()))
        return found


class SourceSet(BaseModel):
    """A named source group (``main``, ``test``, ...)."""

    name: str
    java: SourceDirectorySet
    resources: SourceDirectorySet
    extensions: dict[str, SourceDirectorySet] = Field(default_factory=dict)

    @classmethod
    def create(cls, name: str) -> SourceSet:
        """Create a source set with the conventional ``src/<name>/...`` layout."""
        return cls(
            name=name,
            java=SourceDirectorySet(
                name="java",
                display_name=f"{name} Java source",
                src_dirs=[Path("src", name, "java")],
            ),
            resources=SourceDirectorySet(
                name="resources",
                display_name=f"{name} resources",
                src_dirs=[Path("src", name, "resources")],
            ),
        )

    def get_extension(self, key: str) -> SourceDirectorySet | None:
        return self.extensions.get(key)
