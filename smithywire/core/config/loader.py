"""
Build description loader — reads build.yml into a configured project.

A build description declares a host project as data: which plugins
to apply, its dependencies, extra source sets, task switches and the
``smithy`` extension block.  ``configure_project`` replays it in the
order a build script would run:

    plugins → smithy extension → source sets → dependencies → task switches

leaving the project ready for ``Project.evaluate()``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from smithywire.core.conventions import JAVA_PLUGIN_ID, apply_java_conventions
from smithywire.core.errors import SmithyWireError
from smithywire.core.models.project import Project
from smithywire.core.observability.diagnostics import DiagnosticSink
from smithywire.core.plugin.lifecycle import SmithyPlugin, apply_plugin

logger = logging.getLogger(__name__)

BUILD_CONFIG_FILE = "build.yml"


class ConfigError(SmithyWireError):
    """Raised when a build description is invalid or missing."""


class TaskSettings(BaseModel):
    """Per-task switches a build description may set."""

    enabled: bool | None = None
    depends_on: list[str] = Field(default_factory=list)


class SmithySettings(BaseModel):
    """The ``smithy:`` block, copied onto the extension as declared."""

    projection: str | None = None
    output_directory: Path | None = None
    cli_version_override: str | None = None


class BuildDescription(BaseModel):
    """Contents of build.yml."""

    name: str
    plugins: list[str] = Field(default_factory=lambda: [JAVA_PLUGIN_ID])
    source_sets: list[str] = Field(default_factory=list)
    dependencies: dict[str, list[str]] = Field(default_factory=dict)
    tasks: dict[str, TaskSettings] = Field(default_factory=dict)
    smithy: SmithySettings = Field(default_factory=SmithySettings)


def find_build_file(start_dir: Path | None = None) -> Path | None:
    """Search for build.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to build.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / BUILD_CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_build(path: Path | None = None) -> BuildDescription:
    """Load and validate a build description.

    Args:
        path: Explicit path to build.yml. If None, searches upward.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_build_file()

    if path is None:
        raise ConfigError(f"No {BUILD_CONFIG_FILE} found. Specify one with --config.")

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading build description from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        build = BuildDescription.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid build description: {e}") from e

    logger.info("Loaded build '%s' from %s", build.name, path)
    return build


def configure_project(
    build: BuildDescription,
    project_dir: Path,
    sink: DiagnosticSink | None = None,
) -> tuple[Project, SmithyPlugin]:
    """Create a project from a build description and apply the smithy plugin.

    The returned project is still configuring; call ``evaluate()`` on it
    to run the wiring pass.

    Raises:
        ConfigError: On unknown plugins, tasks or malformed dependencies.
    """
    project = Project(name=build.name, project_dir=project_dir)

    for plugin_id in build.plugins:
        if plugin_id == JAVA_PLUGIN_ID:
            apply_java_conventions(project)
        elif plugin_id != "smithy":
            raise ConfigError(f"Unknown plugin '{plugin_id}'")

    plugin = apply_plugin(project, sink)

    for option, value in build.smithy.model_dump(exclude_none=True).items():
        setattr(plugin.extension, option, value)

    for name in build.source_sets:
        project.create_source_set(name)

    for conf_name, notations in build.dependencies.items():
        project.maybe_create_configuration(conf_name)
        for notation in notations:
            try:
                project.add_dependency(conf_name, notation)
            except ValueError as e:
                raise ConfigError(str(e)) from e

    for task_name, settings in build.tasks.items():
        lookup = project.find_task(task_name)
        if not lookup.found:
            raise ConfigError(f"Unknown task '{task_name}' in {BUILD_CONFIG_FILE}")
        task = lookup.require()
        if settings.enabled is not None:
            task.enabled = settings.enabled
        task.depends_on(*settings.depends_on)

    return project, plugin


def project_root(config_path: Path) -> Path:
    """Get the project directory from a build file path."""
    return config_path.parent.resolve()
