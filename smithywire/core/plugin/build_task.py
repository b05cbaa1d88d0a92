"""
Smithy build task — the generation step the plugin splices into the graph.

Running the task (invoking the CLI, writing projections and the
manifest) belongs to the task runner.  This model carries what the
wiring pass needs: its name, whether it has anything to do, and the
lazily validated options it will consume.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field

from smithywire.core.models.extension import SmithyExtension
from smithywire.core.models.project import Project
from smithywire.core.models.task import Task
from smithywire.core.observability.diagnostics import DiagnosticSink
from smithywire.core.plugin.sources import GENERATED_RESOURCES_DIR, model_files

BUILD_TASK_NAME = "smithyBuildJar"


class SmithyBuildTask(Task):
    """Builds Smithy projections and validates them with the Smithy CLI."""

    name: str = BUILD_TASK_NAME
    group: str = "build"
    description: str = "Builds Smithy models and adds them to the JAR"
    build_configs: list[Path] = Field(default_factory=lambda: [Path("smithy-build.json")])

    def projection(self, extension: SmithyExtension) -> str:
        return extension.resolve_projection()

    def output_directory(self, project: Project, extension: SmithyExtension) -> Path:
        return extension.resolve_output_directory(project.project_dir, project.name)

    def manifest_directory(self, project: Project) -> Path:
        """Where the generated manifest is written for inclusion in the JAR."""
        return project.file(GENERATED_RESOURCES_DIR / "META-INF" / "smithy")

    def existing_build_configs(self, project: Project) -> list[Path]:
        return [project.file(p) for p in self.build_configs if project.file(p).is_file()]

    def has_work(self, project: Project, extension: SmithyExtension) -> bool:
        """Whether there is anything for the task to build."""
        if extension.projection is not None:
            return True
        if self.existing_build_configs(project):
            return True
        return bool(model_files(project))

    def refresh_enabled(
        self,
        project: Project,
        extension: SmithyExtension,
        sink: DiagnosticSink,
    ) -> bool:
        """Resolve the enabled flag from the extension and model sources.

        A task the user disabled stays disabled.  Otherwise it is enabled
        only when it has work.  The options it will consume are validated
        here when enabled.

        Raises:
            InvalidExtensionValueError: If a declared option is invalid.
        """
        if self.enabled:
            self.enabled = self.has_work(project, extension)
            reason = "has work" if self.enabled else "no Smithy models found"
        else:
            reason = "disabled by the build"

        data: dict = {"enabled": self.enabled, "reason": reason}
        if self.enabled:
            data["projection"] = self.projection(extension)
            data["output_directory"] = str(self.output_directory(project, extension))

        sink.publish(
            "task:enabled",
            key=self.name,
            data=data,
            message=f"Task {self.name} {'enabled' if self.enabled else 'disabled'} ({reason})",
            level="debug",
        )
        return self.enabled
