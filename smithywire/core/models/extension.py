"""
Smithy extension — the options a build declares for the plugin.

Values are recorded as-is during configuration and validated only
when read. ``None`` means "not declared"; defaults are supplied by
the ``resolve_*`` readers, never stored.
"""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, PrivateAttr

from smithywire.core.errors import InvalidExtensionValueError, LifecycleError

DEFAULT_PROJECTION = "source"

_PROJECTION_RE = re.compile(r"[A-Za-z0-9_.-]+")
_VERSION_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.+-]*")


class SmithyExtension(BaseModel):
    """The ``smithy`` extension registered on a project."""

    model_config = ConfigDict(validate_assignment=True)

    projection: str | None = None
    output_directory: Path | None = None
    cli_version_override: str | None = None

    _locked: bool = PrivateAttr(default=False)

    def __setattr__(self, name: str, value: object) -> None:
        if not name.startswith("_") and getattr(self, "_locked", False):
            raise LifecycleError(
                f"Cannot set smithy.{name} after the project has been evaluated"
            )
        super().__setattr__(name, value)

    def lock(self) -> None:
        """Make the extension read-only. Called once wiring has run."""
        self._locked = True

    @property
    def locked(self) -> bool:
        return self._locked

    def resolve_projection(self) -> str:
        if self.projection is None:
            return DEFAULT_PROJECTION
        if not _PROJECTION_RE.fullmatch(self.projection):
            raise InvalidExtensionValueError(
                "projection",
                self.projection,
                "projection names may only contain letters, digits, '.', '_' and '-'",
            )
        return self.projection

    def resolve_output_directory(self, project_dir: Path, project_name: str) -> Path:
        if self.output_directory is None:
            return project_dir / "build" / "smithyprojections" / project_name
        if str(self.output_directory).strip() in ("", "."):
            raise InvalidExtensionValueError(
                "output_directory",
                str(self.output_directory),
                "output directory must name a directory below the project",
            )
        if self.output_directory.is_absolute():
            return self.output_directory
        return project_dir / self.output_directory

    def resolve_cli_version_override(self) -> str | None:
        if self.cli_version_override is None:
            return None
        if not _VERSION_RE.fullmatch(self.cli_version_override):
            raise InvalidExtensionValueError(
                "cli_version_override",
                self.cli_version_override,
                "expected a version such as '1.2.3'",
            )
        return self.cli_version_override
