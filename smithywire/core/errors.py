"""
Error taxonomy — every failure raised by the wiring pass.

All errors are fatal for the evaluation pass that raised them: there
is no retry, the host surfaces them through its evaluation failure
channel (``ProjectEvaluationError``) and the build invocation fails.
"""

from __future__ import annotations


class SmithyWireError(Exception):
    """Base class for all smithywire errors."""


class MissingElementError(SmithyWireError):
    """A named host element (configuration, source set, task) does not exist."""

    def __init__(self, kind: str, name: str, message: str = "") -> None:
        self.kind = kind
        self.name = name
        super().__init__(message or f"No {kind} named '{name}' exists in this project")


class MissingTaskError(MissingElementError):
    """A host task required for wiring is not defined.

    This means the foundational Java conventions were not applied to
    the project before evaluation.
    """

    def __init__(self, name: str) -> None:
        super().__init__(
            "task",
            name,
            f"Task '{name}' not found. Apply the 'java' plugin before the smithy plugin.",
        )


class DuplicateElementError(SmithyWireError):
    """A named host element was registered twice."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"A {kind} named '{name}' already exists")


class SourceGroupNameError(SmithyWireError):
    """A source set name cannot be substituted into a directory template."""


class InvalidExtensionValueError(SmithyWireError):
    """A value declared on the smithy extension failed validation when read."""

    def __init__(self, option: str, value: object, reason: str) -> None:
        self.option = option
        self.value = value
        super().__init__(f"Invalid smithy.{option} value {value!r}: {reason}")


class LifecycleError(SmithyWireError):
    """A lifecycle transition was attempted out of order or twice."""


class ProjectEvaluationError(SmithyWireError):
    """An after-evaluate callback failed; the whole evaluation is aborted."""

    def __init__(self, project_name: str, cause: BaseException) -> None:
        self.project_name = project_name
        self.cause = cause
        super().__init__(f"A problem occurred evaluating project '{project_name}': {cause}")
