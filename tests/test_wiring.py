"""
Tests for the Smithy build task and task graph wiring.
"""

from pathlib import Path

import pytest

from smithywire.core.errors import InvalidExtensionValueError, MissingTaskError
from smithywire.core.models.extension import SmithyExtension
from smithywire.core.models.project import Project
from smithywire.core.models.task import Task
from smithywire.core.plugin.build_task import BUILD_TASK_NAME, SmithyBuildTask
from smithywire.core.plugin.sources import extend_source_sets
from smithywire.core.plugin.wiring import wire_build_task, wiring_target


@pytest.fixture
def build_task(java_project: Project) -> SmithyBuildTask:
    task = SmithyBuildTask()
    java_project.register_task(task)
    return task


class TestWireBuildTask:
    def test_jar_enabled_wires_compile(self, java_project: Project, build_task, sink):
        target = wire_build_task(java_project, build_task, sink)
        assert target == "compileJava"
        assert java_project.tasks["compileJava"].has_prerequisite(BUILD_TASK_NAME)
        assert not java_project.tasks["assemble"].has_prerequisite(BUILD_TASK_NAME)
        assert sink.of_type("task:wired")[0]["data"] == {"target": "compileJava"}

    def test_jar_disabled_wires_assemble(self, java_project: Project, build_task, sink):
        java_project.tasks["jar"].enabled = False
        target = wire_build_task(java_project, build_task, sink)
        assert target == "assemble"
        assert java_project.tasks["assemble"].has_prerequisite(BUILD_TASK_NAME)
        assert not java_project.tasks["compileJava"].has_prerequisite(BUILD_TASK_NAME)

    def test_disabled_build_task_adds_no_edges(self, java_project: Project, build_task, sink):
        build_task.enabled = False
        before = {name: list(t.prerequisites) for name, t in java_project.tasks.items()}
        assert wire_build_task(java_project, build_task, sink) is None
        after = {name: list(t.prerequisites) for name, t in java_project.tasks.items()}
        assert before == after
        assert sink.types() == ["task:skipped"]

    def test_existing_edges_are_kept(self, java_project: Project, build_task, sink):
        java_project.tasks["jar"].enabled = False
        wire_build_task(java_project, build_task, sink)
        assert java_project.tasks["assemble"].prerequisites == ["jar", BUILD_TASK_NAME]

    def test_missing_jar_task_is_fatal(self, bare_project: Project, sink):
        task = bare_project.register_task(SmithyBuildTask())
        with pytest.raises(MissingTaskError, match="jar"):
            wire_build_task(bare_project, task, sink)

    def test_missing_target_task_is_fatal(self, bare_project: Project, sink):
        bare_project.register_task(Task(name="jar", enabled=False))
        task = bare_project.register_task(SmithyBuildTask())
        with pytest.raises(MissingTaskError, match="assemble"):
            wire_build_task(bare_project, task, sink)

    def test_wiring_target(self, java_project: Project):
        assert wiring_target(java_project) == "compileJava"
        java_project.tasks["jar"].enabled = False
        assert wiring_target(java_project) == "assemble"


class TestSmithyBuildTask:
    def test_disabled_without_models(self, java_project: Project, build_task, sink):
        extend_source_sets(java_project, sink)
        assert build_task.refresh_enabled(java_project, SmithyExtension(), sink) is False
        assert sink.of_type("task:enabled")[0]["data"]["reason"] == "no Smithy models found"

    def test_enabled_by_model_files(self, java_project: Project, build_task, sink, write_model):
        write_model("src/main/smithy/weather.smithy")
        extend_source_sets(java_project, sink)
        assert build_task.refresh_enabled(java_project, SmithyExtension(), sink) is True

    def test_enabled_by_declared_projection(self, java_project: Project, build_task, sink):
        ext = SmithyExtension(projection="external")
        assert build_task.refresh_enabled(java_project, ext, sink) is True
        data = sink.of_type("task:enabled")[0]["data"]
        assert data["projection"] == "external"

    def test_enabled_by_build_config(self, java_project: Project, build_task, sink, tmp_path: Path):
        (tmp_path / "smithy-build.json").write_text('{"version": "1.0"}')
        assert build_task.refresh_enabled(java_project, SmithyExtension(), sink) is True

    def test_user_disabled_stays_disabled(self, java_project: Project, build_task, sink, write_model):
        write_model()
        extend_source_sets(java_project, sink)
        build_task.enabled = False
        assert build_task.refresh_enabled(java_project, SmithyExtension(), sink) is False

    def test_invalid_projection_is_fatal_when_enabled(self, java_project: Project, build_task, sink):
        ext = SmithyExtension(projection="no/such projection")
        with pytest.raises(InvalidExtensionValueError):
            build_task.refresh_enabled(java_project, ext, sink)

    def test_output_and_manifest_directories(self, java_project: Project, build_task, tmp_path: Path):
        ext = SmithyExtension()
        assert build_task.output_directory(java_project, ext) == (
            tmp_path / "build" / "smithyprojections" / "demo"
        )
        assert build_task.manifest_directory(java_project) == (
            tmp_path / "build" / "tmp" / "smithy-inf" / "META-INF" / "smithy"
        )
