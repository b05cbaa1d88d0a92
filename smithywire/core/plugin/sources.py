"""
Source layout extender — adds Smithy model directories to source sets.

Smithy models can live in ``model/``, ``src/<name>/smithy`` and
``src/<name>/resources/META-INF/smithy``.  Each source set gets those
three directories as a ``smithy`` extension; its Java sources and
resources are left alone.

The ``main`` source set additionally gets the generated-resource
directory as a resource root so the manifest produced by the build
task ends up in the packaged JAR.
"""

from __future__ import annotations

import re
from pathlib import Path

from smithywire.core.errors import SourceGroupNameError
from smithywire.core.models.project import Project
from smithywire.core.models.source_set import SourceDirectorySet, SourceSet
from smithywire.core.observability.diagnostics import DiagnosticSink

EXTENSION_KEY = "smithy"

SOURCE_DIRS = ("model", "src/$name/smithy", "src/$name/resources/META-INF/smithy")

# Parent of the META-INF/smithy directory the build task writes manifests to.
GENERATED_RESOURCES_DIR = Path("build", "tmp", "smithy-inf")

_SAFE_NAME_RE = re.compile(r"[A-Za-z0-9_.-]+")


def source_dirs_for(name: str) -> list[Path]:
    """The three model directories for a source set name.

    Raises:
        SourceGroupNameError: If the name cannot be used as a path segment.
    """
    if name in (".", "..") or not _SAFE_NAME_RE.fullmatch(name):
        raise SourceGroupNameError(
            f"Source set name {name!r} cannot be used in a Smithy source path"
        )
    return [Path(template.replace("$name", name)) for template in SOURCE_DIRS]


def extend_source_set(
    project: Project,
    source_set: SourceSet,
    sink: DiagnosticSink,
) -> SourceDirectorySet:
    """Attach a fresh ``smithy`` directory set to one source set."""
    name = source_set.name
    sds = SourceDirectorySet(name=name, display_name=f"{name} Smithy sources")
    for directory in source_dirs_for(name):
        sds.src_dir(directory)
    source_set.extensions[EXTENSION_KEY] = sds

    sink.publish(
        "sources:extended",
        key=name,
        data={"dirs": [d.as_posix() for d in sds.src_dirs]},
        message=f"Adding Smithy extension to {name} source set",
        level="debug",
    )

    if name == "main":
        added = source_set.resources.src_dir(GENERATED_RESOURCES_DIR)
        sink.publish(
            "sources:resources",
            key=name,
            data={"dir": GENERATED_RESOURCES_DIR.as_posix(), "added": added},
            message=(
                "Registering Smithy resource artifacts with Java resources: "
                f"{project.file(GENERATED_RESOURCES_DIR)}"
            ),
            level="debug",
        )
    return sds


def extend_source_sets(project: Project, sink: DiagnosticSink) -> list[str]:
    """Give every source set that exists right now a ``smithy`` extension.

    Source sets are enumerated at call time, so sets created after the
    plugin was applied are included.

    Returns:
        Names of the extended source sets, in project order.
    """
    extended = []
    for source_set in project.all_source_sets():
        extend_source_set(project, source_set, sink)
        extended.append(source_set.name)
    return extended


def model_files(project: Project) -> list[Path]:
    """Every file found in the ``smithy`` extensions of all source sets."""
    files: list[Path] = []
    for source_set in project.all_source_sets():
        sds = source_set.get_extension(EXTENSION_KEY)
        if sds is None:
            continue
        for path in sds.files(project.project_dir):
            if path not in files:
                files.append(path)
    return files
