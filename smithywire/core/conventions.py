"""
Java conventions — the host's foundational build layout.

Applying the conventions gives a project the standard dependency
configurations, the ``main`` and ``test`` source sets, and the
compile/package task chain that other plugins hook into:

    compileJava, processResources → classes → jar → assemble → build
"""

from __future__ import annotations

import logging

from smithywire.core.models.project import Project
from smithywire.core.models.task import Task

logger = logging.getLogger(__name__)

JAVA_PLUGIN_ID = "java"

# name → (description, configurations it extends)
_CONFIGURATIONS: dict[str, tuple[str, tuple[str, ...]]] = {
    "compileOnly": ("Compile-only dependencies", ()),
    "implementation": ("Implementation dependencies", ()),
    "runtimeOnly": ("Runtime-only dependencies", ()),
    "compileClasspath": ("Compile classpath", ("compileOnly", "implementation")),
    "runtimeClasspath": ("Runtime classpath", ("implementation", "runtimeOnly")),
    "testImplementation": ("Test implementation dependencies", ("implementation",)),
    "testRuntimeOnly": ("Test runtime-only dependencies", ("runtimeOnly",)),
    "testRuntimeClasspath": (
        "Test runtime classpath",
        ("testImplementation", "testRuntimeOnly"),
    ),
}

# name → (group, prerequisites)
_TASKS: dict[str, tuple[str, tuple[str, ...]]] = {
    "compileJava": ("", ()),
    "processResources": ("", ()),
    "classes": ("build", ("compileJava", "processResources")),
    "jar": ("build", ("classes",)),
    "assemble": ("build", ("jar",)),
    "compileTestJava": ("", ("classes",)),
    "test": ("verification", ("compileTestJava",)),
    "check": ("verification", ("test",)),
    "build": ("build", ("assemble", "check")),
}


def apply_java_conventions(project: Project) -> bool:
    """Apply the Java conventions to a project.

    Returns:
        False if the conventions were already applied (nothing changed).
    """
    if not project.mark_plugin_applied(JAVA_PLUGIN_ID):
        return False

    for name, (description, parents) in _CONFIGURATIONS.items():
        conf = project.maybe_create_configuration(name, description)
        conf.extend_from(*(project.configurations[p] for p in parents))

    for name in ("main", "test"):
        project.create_source_set(name)

    for name, (group, prerequisites) in _TASKS.items():
        if project.find_task(name).found:
            continue
        task = Task(name=name, group=group)
        task.depends_on(*prerequisites)
        project.register_task(task)

    logger.debug("Applied Java conventions to project '%s'", project.name)
    return True
