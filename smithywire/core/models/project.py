"""
Project model — the host build project that plugins augment.

A project is a mutable container of configurations, source sets,
tasks and named extensions. It goes through two phases:

    configuring → evaluate() → evaluated   (or failed)

Plugins register after-evaluate callbacks while configuring; the host
driver calls ``evaluate()`` exactly once to run them, in registration
order, with the configuration frozen in place.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr

from smithywire.core.errors import (
    DuplicateElementError,
    LifecycleError,
    ProjectEvaluationError,
)
from smithywire.core.models.dependency import Configuration, Dependency
from smithywire.core.models.lookup import Lookup
from smithywire.core.models.source_set import SourceSet
from smithywire.core.models.task import Task

logger = logging.getLogger(__name__)

AfterEvaluateCallback = Callable[["Project"], Any]


class Project(BaseModel):
    """A host build project."""

    name: str
    project_dir: Path = Field(default_factory=Path.cwd)

    configurations: dict[str, Configuration] = Field(default_factory=dict)
    source_sets: dict[str, SourceSet] = Field(default_factory=dict)
    tasks: dict[str, Task] = Field(default_factory=dict)
    extensions: dict[str, Any] = Field(default_factory=dict)
    applied_plugins: list[str] = Field(default_factory=list)

    _after_evaluate: list[AfterEvaluateCallback] = PrivateAttr(default_factory=list)
    _state: str = PrivateAttr(default="configuring")
    _plugins: dict[str, Any] = PrivateAttr(default_factory=dict)

    # ── Lifecycle ───────────────────────────────────────────────

    @property
    def state(self) -> str:
        """One of ``configuring``, ``evaluated`` or ``failed``."""
        return self._state

    def after_evaluate(self, callback: AfterEvaluateCallback) -> None:
        """Register a callback to run once configuration is final."""
        if self._state != "configuring":
            raise LifecycleError(
                f"Cannot register an after-evaluate callback: project '{self.name}' "
                f"is already {self._state}"
            )
        self._after_evaluate.append(callback)

    def evaluate(self) -> None:
        """Finish configuration and run every after-evaluate callback once.

        Raises:
            LifecycleError: If the project was already evaluated.
            ProjectEvaluationError: If any callback fails. Callbacks
                registered after the failing one do not run.
        """
        if self._state != "configuring":
            raise LifecycleError(f"Project '{self.name}' has already been evaluated")

        logger.debug(
            "Evaluating project '%s' (%d after-evaluate callbacks)",
            self.name, len(self._after_evaluate),
        )
        for callback in self._after_evaluate:
            try:
                callback(self)
            except Exception as e:
                self._state = "failed"
                raise ProjectEvaluationError(self.name, e) from e
        self._state = "evaluated"

    # ── Paths ───────────────────────────────────────────────────

    @property
    def build_dir(self) -> Path:
        return self.project_dir / "build"

    def file(self, path: str | Path) -> Path:
        """Resolve a path against the project directory."""
        path = Path(path)
        return path if path.is_absolute() else self.project_dir / path

    # ── Plugins ─────────────────────────────────────────────────

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self.applied_plugins

    def mark_plugin_applied(self, plugin_id: str, instance: Any = None) -> bool:
        """Record a plugin as applied. Returns False if it already was."""
        if plugin_id in self.applied_plugins:
            return False
        self.applied_plugins.append(plugin_id)
        if instance is not None:
            self._plugins[plugin_id] = instance
        return True

    def get_plugin(self, plugin_id: str) -> Any:
        """The object recorded for an applied plugin, if any."""
        return self._plugins.get(plugin_id)

    # ── Configurations & dependencies ───────────────────────────

    def maybe_create_configuration(self, name: str, description: str = "") -> Configuration:
        """Return the named configuration, creating it when missing."""
        conf = self.configurations.get(name)
        if conf is None:
            conf = Configuration(name=name, description=description)
            self.configurations[name] = conf
            logger.debug("Created configuration '%s'", name)
        return conf

    def find_configuration(self, name: str) -> Lookup[Configuration]:
        return Lookup("configuration", name, self.configurations.get(name))

    def add_dependency(self, configuration: str, dependency: str | Dependency) -> Dependency:
        """Append a dependency to an existing configuration.

        Raises:
            MissingElementError: If the configuration does not exist.
            ValueError: If a string notation cannot be parsed.
        """
        conf = self.find_configuration(configuration).require()
        if isinstance(dependency, str):
            dependency = Dependency.parse(dependency)
        return conf.add(dependency)

    # ── Source sets ─────────────────────────────────────────────

    def create_source_set(self, name: str) -> SourceSet:
        """Create a source set with the conventional layout (idempotent)."""
        existing = self.source_sets.get(name)
        if existing is not None:
            return existing
        source_set = SourceSet.create(name)
        self.source_sets[name] = source_set
        return source_set

    def find_source_set(self, name: str) -> Lookup[SourceSet]:
        return Lookup("source set", name, self.source_sets.get(name))

    def all_source_sets(self) -> list[SourceSet]:
        """Snapshot of the source sets as they exist right now."""
        return list(self.source_sets.values())

    # ── Tasks ───────────────────────────────────────────────────

    def register_task(self, task: Task) -> Task:
        if task.name in self.tasks:
            raise DuplicateElementError("task", task.name)
        self.tasks[task.name] = task
        return task

    def find_task(self, name: str) -> Lookup[Task]:
        return Lookup("task", name, self.tasks.get(name))

    # ── Extensions ──────────────────────────────────────────────

    def create_extension(self, name: str, extension: Any) -> Any:
        if name in self.extensions:
            raise DuplicateElementError("extension", name)
        self.extensions[name] = extension
        return extension

    def find_extension(self, name: str) -> Lookup[Any]:
        return Lookup("extension", name, self.extensions.get(name))
