"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from smithywire.core.conventions import apply_java_conventions
from smithywire.core.models.project import Project
from smithywire.core.observability.diagnostics import DiagnosticSink


@pytest.fixture
def sink() -> DiagnosticSink:
    return DiagnosticSink()


@pytest.fixture
def bare_project(tmp_path: Path) -> Project:
    """A project with no plugins applied."""
    return Project(name="demo", project_dir=tmp_path)


@pytest.fixture
def java_project(bare_project: Project) -> Project:
    """A project with the Java conventions applied."""
    apply_java_conventions(bare_project)
    return bare_project


@pytest.fixture
def write_model(tmp_path: Path):
    """Factory that creates a Smithy model file below the project dir."""

    def _write(relative: str = "model/main.smithy") -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("namespace example.weather\n\nstring CityId\n")
        return path

    return _write
