"""
Config check use case — validate build.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from smithywire.core.config.loader import (
    BuildDescription,
    ConfigError,
    find_build_file,
    load_build,
)
from smithywire.core.conventions import JAVA_PLUGIN_ID
from smithywire.core.errors import InvalidExtensionValueError, SourceGroupNameError
from smithywire.core.models.extension import SmithyExtension
from smithywire.core.plugin.sources import source_dirs_for
from smithywire.core.plugin.versions import CLI_ARTIFACT, CLI_CONFIGURATION, SMITHY_GROUP


@dataclass
class ConfigCheckResult:
    """Result of build description validation."""

    valid: bool = False
    build: BuildDescription | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project_name": self.build.name if self.build else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate a build description without evaluating it.

    Extension values are checked with the same rules the wiring pass
    applies when it reads them.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_build_file()
    if config_path is None:
        result.errors.append("No build.yml found.")
        return result
    result.config_path = config_path

    try:
        build = load_build(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.build = build

    extension = SmithyExtension.model_validate(build.smithy.model_dump())
    for reader in (extension.resolve_projection, extension.resolve_cli_version_override):
        try:
            reader()
        except InvalidExtensionValueError as e:
            result.errors.append(str(e))

    for name in build.source_sets:
        try:
            source_dirs_for(name)
        except SourceGroupNameError as e:
            result.errors.append(str(e))

    if JAVA_PLUGIN_ID not in build.plugins:
        result.warnings.append(
            "The 'java' plugin is not applied; wiring will fail without the jar, "
            "assemble and compileJava tasks."
        )

    cli_prefix = f"{SMITHY_GROUP}:{CLI_ARTIFACT}"
    pinned = [
        n for n in build.dependencies.get(CLI_CONFIGURATION, [])
        if n.strip() == cli_prefix or n.strip().startswith(cli_prefix + ":")
    ]
    if pinned and build.smithy.cli_version_override:
        result.warnings.append(
            f"smithy.cli_version_override is ignored because {CLI_CONFIGURATION} "
            "already declares the Smithy CLI."
        )

    result.valid = not result.errors
    return result
