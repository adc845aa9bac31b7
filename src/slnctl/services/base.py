"""BaseService — shared foundation for slnctl services.

Every service receives the resolved :class:`SlnSettings` at construction
time and loads the solution it operates on per call. The loaded document is
owned by that call alone and is written at most once, at the end.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from slnctl.infrastructure.slnfile import SlnFile, load_solution

if TYPE_CHECKING:
    from slnctl.config.settings import SlnSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class MembershipService(BaseService):
            def add(self, solution: str, projects: list[str]) -> ServiceResult:
                sln = self._load(solution)
                ...
    """

    def __init__(self, settings: SlnSettings, *, cwd: Path | None = None) -> None:
        self._settings = settings
        self._cwd = cwd

    def _load(self, solution: str) -> SlnFile:
        """Load the solution named by a file path or containing directory."""
        path = Path(solution)
        if not path.is_absolute() and self._cwd is not None:
            path = self._cwd / path
        return load_solution(
            path,
            extension=self._settings.solution.extension,
            case_sensitive=self._settings.membership.case_sensitive,
        )

    def _persist(self, sln: SlnFile, changed: bool) -> None:
        """Write the solution back only if it was mutated."""
        if not changed:
            logger.debug("Solution %s unchanged, not writing", sln.path)
            return
        sln.write()
