"""
Dependency model — declared coordinates and the configurations holding them.

Dependencies are identified by ``(group, name)`` when matching; the
version is only ever read, never used for identity.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class Dependency(BaseModel):
    """An external module dependency in ``group:name:version`` form."""

    model_config = ConfigDict(frozen=True)

    group: str
    name: str
    version: str = ""

    @classmethod
    def parse(cls, notation: str) -> Dependency:
        """Parse a ``group:name[:version]`` notation string.

        Raises:
            ValueError: If the notation lacks a group or name.
        """
        parts = notation.strip().split(":")
        if len(parts) not in (2, 3) or not all(parts[:2]):
            raise ValueError(
                f"Invalid dependency notation '{notation}', expected group:name:version"
            )
        version = parts[2] if len(parts) == 3 else ""
        return cls(group=parts[0], name=parts[1], version=version)

    @property
    def notation(self) -> str:
        if self.version:
            return f"{self.group}:{self.name}:{self.version}"
        return f"{self.group}:{self.name}"

    def matches(self, group: str, name: str) -> bool:
        """Whether this dependency has the given identity (version ignored)."""
        return self.group == group and self.name == name


class Configuration(BaseModel):
    """A named, ordered bucket of dependencies.

    A configuration may extend others; ``all_dependencies`` then yields
    its own dependencies followed by the inherited ones, in declaration
    order.
    """

    name: str
    description: str = ""
    dependencies: list[Dependency] = Field(default_factory=list)

    _parents: list[Configuration] = PrivateAttr(default_factory=list)

    @property
    def extends_from(self) -> list[str]:
        return [p.name for p in self._parents]

    def extend_from(self, *others: Configuration) -> None:
        for other in others:
            if other is self or any(p is other for p in self._parents):
                continue
            self._parents.append(other)

    def add(self, dependency: Dependency) -> Dependency:
        self.dependencies.append(dependency)
        return dependency

    @property
    def all_dependencies(self) -> list[Dependency]:
        """Own and inherited dependencies, first occurrence wins."""
        result: list[Dependency] = []
        seen: set[Dependency] = set()
        visited: set[str] = set()

        def walk(conf: Configuration) -> None:
            if conf.name in visited:
                return
            visited.add(conf.name)
            for dep in conf.dependencies:
                if dep not in seen:
                    seen.add(dep)
                    result.append(dep)
            for parent in conf._parents:
                walk(parent)

        walk(self)
        return result

    def find(self, group: str, name: str) -> list[Dependency]:
        """All dependencies (own and inherited) with the given identity."""
        return [d for d in self.all_dependencies if d.matches(group, name)]

    def __len__(self) -> int:
        return len(self.dependencies)
