"""
CLI version inference — decides which Smithy CLI the build should use.

The Smithy CLI is invoked with a custom classpath to validate the
generated JAR, so ``smithyCli`` must contain the CLI artifact.  If the
user already declared it there, that pin is respected.  Otherwise the
version is, in order:

    1. smithy.cli_version_override, when declared
    2. the version of the first smithy-model dependency found on the
       runtime classpath (own and inherited dependencies, declaration
       order; differing versions are not reconciled)
    3. DEFAULT_CLI_VERSION

and exactly one ``software.amazon.smithy:smithy-cli:<version>`` is
appended to ``smithyCli``.
"""

from __future__ import annotations

from dataclasses import dataclass

from smithywire.core.models.dependency import Dependency
from smithywire.core.models.extension import SmithyExtension
from smithywire.core.models.project import Project
from smithywire.core.observability.diagnostics import DiagnosticSink

DEFAULT_CLI_VERSION = "0.9.5"

SMITHY_GROUP = "software.amazon.smithy"
CLI_ARTIFACT = "smithy-cli"
MODEL_ARTIFACT = "smithy-model"

CLI_CONFIGURATION = "smithyCli"
RUNTIME_CONFIGURATION = "runtimeClasspath"


@dataclass
class CliVersionResolution:
    """Outcome of CLI version inference."""

    version: str | None = None
    source: str = ""                 # pinned, override, detected, default
    added: Dependency | None = None  # dependency appended to smithyCli, if any

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "source": self.source,
            "added": self.added.notation if self.added else None,
        }


def is_smithy_dependency(dependency: Dependency, name: str) -> bool:
    return dependency.matches(SMITHY_GROUP, name)


def detect_model_version(project: Project) -> str | None:
    """Version of the first versioned smithy-model dependency on the runtime classpath.

    Declarations without a version cannot be turned into a CLI request
    and are skipped.
    """
    runtime = project.find_configuration(RUNTIME_CONFIGURATION).or_none()
    if runtime is None:
        return None
    for dependency in runtime.all_dependencies:
        if is_smithy_dependency(dependency, MODEL_ARTIFACT) and dependency.version:
            return dependency.version
    return None


def add_cli_dependencies(
    project: Project,
    extension: SmithyExtension,
    sink: DiagnosticSink,
) -> CliVersionResolution:
    """Make sure ``smithyCli`` contains the Smithy CLI.

    Appends at most one dependency per call.
    """
    cli = project.maybe_create_configuration(CLI_CONFIGURATION, "Smithy CLI classpath")

    pinned = [d for d in cli.all_dependencies if is_smithy_dependency(d, CLI_ARTIFACT)]
    if pinned:
        sink.publish(
            "cli:pinned",
            key=cli.name,
            data={"version": pinned[0].version},
            message="Using explicitly configured Smithy CLI",
        )
        return CliVersionResolution(version=pinned[0].version, source="pinned")

    override = extension.resolve_cli_version_override()
    detected = None if override is not None else detect_model_version(project)

    if override is not None:
        version, source = override, "override"
        message = f"Using Smithy CLI version {version} from smithy.cli_version_override"
    elif detected is not None:
        version, source = detected, "detected"
        message = f"Detected Smithy CLI version {version}"
    else:
        version, source = DEFAULT_CLI_VERSION, "default"
        message = (
            "No Smithy model dependencies were found in the JAR, "
            f"assuming Smithy CLI version {version}"
        )

    added = cli.add(Dependency(group=SMITHY_GROUP, name=CLI_ARTIFACT, version=version))
    sink.publish(
        f"cli:{source}",
        key=cli.name,
        data={"version": version, "dependency": added.notation},
        message=message,
    )
    return CliVersionResolution(version=version, source=source, added=added)
