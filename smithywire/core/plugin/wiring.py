"""
Task graph wiring — decides where the Smithy build task runs.

Smithy should build before ``assemble`` when no JAR is being created,
otherwise before ``compileJava`` so the output is in place before the
JAR is assembled.  Exactly one edge is added, and none at all when the
build task is disabled.
"""

from __future__ import annotations

from smithywire.core.models.project import Project
from smithywire.core.models.task import Task
from smithywire.core.observability.diagnostics import DiagnosticSink

JAR_TASK = "jar"
ASSEMBLE_TASK = "assemble"
COMPILE_TASK = "compileJava"


def wiring_target(project: Project) -> str:
    """Name of the task the build task must precede.

    Raises:
        MissingTaskError: If the ``jar`` task does not exist.
    """
    jar = project.find_task(JAR_TASK).require()
    return COMPILE_TASK if jar.enabled else ASSEMBLE_TASK


def wire_build_task(project: Project, build_task: Task, sink: DiagnosticSink) -> str | None:
    """Add the build task as a prerequisite of ``assemble`` or ``compileJava``.

    Returns:
        Name of the task that received the edge, or None when the build
        task is disabled.

    Raises:
        MissingTaskError: If ``jar`` or the target task does not exist.
    """
    if not build_task.enabled:
        sink.publish(
            "task:skipped",
            key=build_task.name,
            message=f"Task {build_task.name} is disabled, task graph unchanged",
            level="debug",
        )
        return None

    target_name = wiring_target(project)
    target = project.find_task(target_name).require()
    target.depends_on(build_task)

    sink.publish(
        "task:wired",
        key=build_task.name,
        data={"target": target_name},
        message=f"{target_name} now depends on {build_task.name}",
        level="debug",
    )
    return target_name
