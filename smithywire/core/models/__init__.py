"""
Host project models — Pydantic types for the project being wired.

All models are re-exported here for convenient access:

    from smithywire.core.models import Project, Configuration, Dependency, SourceSet, Task
"""

from smithywire.core.models.dependency import Configuration, Dependency
from smithywire.core.models.extension import SmithyExtension
from smithywire.core.models.lookup import Lookup
from smithywire.core.models.project import Project
from smithywire.core.models.source_set import SourceDirectorySet, SourceSet
from smithywire.core.models.task import Task

__all__ = [
    # dependency.py
    "Configuration",
    "Dependency",
    # lookup.py
    "Lookup",
    # project.py
    "Project",
    # extension.py
    "SmithyExtension",
    # source_set.py
    "SourceDirectorySet",
    "SourceSet",
    # task.py
    "Task",
]
