"""
Evaluate use case — load a build, apply the smithy plugin, wire it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from smithywire.core.config.loader import (
    ConfigError,
    configure_project,
    find_build_file,
    load_build,
    project_root,
)
from smithywire.core.errors import ProjectEvaluationError
from smithywire.core.models.project import Project
from smithywire.core.observability.diagnostics import DiagnosticSink
from smithywire.core.plugin.lifecycle import WiringReport

logger = logging.getLogger(__name__)


@dataclass
class EvaluateResult:
    """Result of evaluating a build."""

    config_path: Path | None = None
    project: Project | None = None
    report: WiringReport | None = None
    events: list[dict[str, Any]] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "ok": self.ok,
            "config_path": str(self.config_path) if self.config_path else None,
        }
        if self.error:
            data["error"] = self.error
        if self.report:
            data["report"] = self.report.to_dict()
        if self.project:
            data["source_sets"] = {
                name: {
                    key: [d.as_posix() for d in sds.src_dirs]
                    for key, sds in ss.extensions.items()
                }
                for name, ss in self.project.source_sets.items()
            }
            data["configurations"] = {
                name: [d.notation for d in conf.dependencies]
                for name, conf in self.project.configurations.items()
                if conf.dependencies
            }
            data["tasks"] = {
                name: {"enabled": t.enabled, "depends_on": list(t.prerequisites)}
                for name, t in self.project.tasks.items()
            }
        data["events"] = [
            {"type": e["type"], "key": e["key"], "data": e["data"]} for e in self.events
        ]
        return data


def run_evaluate(config_path: Path | None = None) -> EvaluateResult:
    """Load build.yml, apply the smithy plugin and evaluate the project.

    Never raises for configuration or wiring failures; they are
    reported in ``EvaluateResult.error``.
    """
    result = EvaluateResult()
    sink = DiagnosticSink()

    if config_path is None:
        config_path = find_build_file()
    if config_path is None:
        result.error = "No build.yml found."
        return result
    result.config_path = config_path

    try:
        build = load_build(config_path)
        project, plugin = configure_project(build, project_root(config_path), sink)
    except ConfigError as e:
        result.error = str(e)
        return result

    result.project = project
    try:
        project.evaluate()
    except ProjectEvaluationError as e:
        logger.debug("Evaluation of '%s' failed", project.name, exc_info=True)
        result.error = str(e)
    else:
        result.report = plugin.report
    finally:
        result.events = sink.events

    return result
