"""Error taxonomy for solution membership operations.

Every error carries a stable ``code`` that the service layer copies into
:class:`~slnctl.services.result.ServiceError`. Two families:

- Usage errors: the argument shape is wrong. Raised before any I/O.
- Resolution errors: a solution or project path cannot be resolved.

No-ops (project already present on add, absent on remove) are not errors.
"""

from __future__ import annotations

from typing import Any


class SlnError(Exception):
    """Base class for all slnctl errors."""

    code = "SLN_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


# --- Usage errors ---


class UsageError(SlnError):
    code = "USAGE_ERROR"


class NoProjectsError(UsageError):
    code = "NO_PROJECTS"


class MutuallyExclusiveOptionsError(UsageError):
    code = "MUTUALLY_EXCLUSIVE"


class MisplacedSolutionArgumentError(UsageError):
    """A solution file was passed where project paths are expected."""

    code = "SOLUTION_ARGUMENT_MISPLACED"

    def __init__(self, solution: str, suggestion: str) -> None:
        super().__init__(
            f"Solution file {solution!r} was given as a project path",
            solution=solution,
            suggestion=suggestion,
        )
        self.solution = solution
        self.suggestion = suggestion


# --- Resolution errors ---


class ResolutionError(SlnError):
    code = "RESOLUTION_ERROR"


class SolutionNotFoundError(ResolutionError):
    code = "SOLUTION_NOT_FOUND"


class MultipleSolutionsError(ResolutionError):
    code = "MULTIPLE_SOLUTIONS"


class InvalidSolutionError(ResolutionError):
    code = "INVALID_SOLUTION"


class PathNotFoundError(ResolutionError):
    code = "PATH_NOT_FOUND"


class ProjectFileNotFoundError(ResolutionError):
    code = "PROJECT_FILE_NOT_FOUND"


class MultipleProjectFilesError(ResolutionError):
    code = "MULTIPLE_PROJECT_FILES"
