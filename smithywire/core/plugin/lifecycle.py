"""
Smithy plugin lifecycle — applying the plugin and wiring the project.

The smithy extension cannot be read until the build has finished
configuring, so the plugin works in two steps:

    apply_plugin(project)     → DECLARED  (extension + build task registered)
    project.evaluate()        → WIRED     (finalize() runs as after-evaluate)

``finalize()`` runs the pass in a fixed order:

    extend source sets → add CLI dependencies → resolve task enabled → wire task
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from smithywire.core.errors import LifecycleError
from smithywire.core.models.extension import SmithyExtension
from smithywire.core.models.project import Project
from smithywire.core.observability.diagnostics import DiagnosticSink
from smithywire.core.plugin.build_task import SmithyBuildTask
from smithywire.core.plugin.sources import EXTENSION_KEY, extend_source_sets
from smithywire.core.plugin.versions import CliVersionResolution, add_cli_dependencies
from smithywire.core.plugin.wiring import wire_build_task

logger = logging.getLogger(__name__)

PLUGIN_ID = "smithy"


class PluginState(str, Enum):
    DECLARED = "declared"
    WIRED = "wired"


@dataclass
class WiringReport:
    """What a completed pass did to the project."""

    project: str = ""
    source_sets: list[str] = field(default_factory=list)
    cli: CliVersionResolution = field(default_factory=CliVersionResolution)
    build_task_enabled: bool = False
    wired_to: str | None = None

    def to_dict(self) -> dict:
        return {
            "project": self.project,
            "source_sets": self.source_sets,
            "cli": self.cli.to_dict(),
            "build_task_enabled": self.build_task_enabled,
            "wired_to": self.wired_to,
        }


class SmithyPlugin:
    """The smithy plugin as applied to one project."""

    def __init__(
        self,
        project: Project,
        extension: SmithyExtension,
        build_task: SmithyBuildTask,
        sink: DiagnosticSink,
    ) -> None:
        self.project = project
        self.extension = extension
        self.build_task = build_task
        self.sink = sink
        self.state = PluginState.DECLARED
        self.report: WiringReport | None = None

    def finalize(self, project: Project | None = None) -> WiringReport:
        """Transition DECLARED → WIRED.

        Raises:
            LifecycleError: If the plugin was already wired, or is asked
                to wire a different project.
        """
        if self.state is not PluginState.DECLARED:
            raise LifecycleError(f"Smithy plugin for '{self.project.name}' is already wired")
        if project is not None and project is not self.project:
            raise LifecycleError("Smithy plugin cannot wire a project it was not applied to")

        project = self.project
        report = WiringReport(project=project.name)

        report.source_sets = extend_source_sets(project, self.sink)
        report.cli = add_cli_dependencies(project, self.extension, self.sink)
        report.build_task_enabled = self.build_task.refresh_enabled(
            project, self.extension, self.sink,
        )
        report.wired_to = wire_build_task(project, self.build_task, self.sink)

        self.extension.lock()
        self.state = PluginState.WIRED
        self.report = report
        self.sink.publish(
            "lifecycle:wired",
            key=project.name,
            data=report.to_dict(),
            message=f"Smithy plugin wired project '{project.name}'",
            level="debug",
        )
        return report


def apply_plugin(project: Project, sink: DiagnosticSink | None = None) -> SmithyPlugin:
    """Apply the smithy plugin to a project.

    Registers the ``smithy`` extension and the ``smithyBuildJar`` task
    immediately, and defers everything else to an after-evaluate
    callback.  Applying twice returns the plugin from the first
    application, which keeps reporting to its original sink.

    Raises:
        LifecycleError: If the plugin is applied again with a different sink.
    """
    existing = project.get_plugin(PLUGIN_ID)
    if existing is not None:
        if sink is not None and sink is not existing.sink:
            raise LifecycleError(
                f"Smithy plugin is already applied to '{project.name}' with another sink"
            )
        return existing

    if sink is None:
        sink = DiagnosticSink()
    extension = project.create_extension(EXTENSION_KEY, SmithyExtension())
    build_task = project.register_task(SmithyBuildTask())

    plugin = SmithyPlugin(project, extension, build_task, sink)
    project.mark_plugin_applied(PLUGIN_ID, plugin)
    project.after_evaluate(plugin.finalize)

    logger.debug("Applied smithy plugin to project '%s'", project.name)
    return plugin
