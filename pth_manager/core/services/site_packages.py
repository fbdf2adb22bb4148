"""
Site-packages resolution — where the .pth file has to go.

Asks the interpreter for its package directories and takes the first
one. The answer is memoised in ``RuntimeState`` for the rest of the
session; only a state reset clears it.
"""

from __future__ import annotations

import logging

from pth_manager.adapters.base import Interpreter
from pth_manager.adapters.languages.python import PythonInterpreter
from pth_manager.core.errors import ResolutionError
from pth_manager.core.models.probe import Query
from pth_manager.core.models.state import RuntimeState

logger = logging.getLogger(__name__)


class SitePackagesResolver:
    """Resolve and cache the active environment's site-packages path."""

    def __init__(self, interpreter: Interpreter | None = None, executable: str = "python"):
        self._interpreter = interpreter or PythonInterpreter(executable)

    @property
    def interpreter(self) -> Interpreter:
        return self._interpreter

    def resolve(self, state: RuntimeState) -> str:
        """Return the site-packages directory, using the cache when present.

        Raises:
            ResolutionError: Interpreter missing, failed, or returned no paths.
        """
        if state.resolved_packages_cache:
            logger.debug("Using cached site-packages: %s", state.resolved_packages_cache)
            return state.resolved_packages_cache

        query = Query(operation="site_packages")
        problem = self._interpreter.check(query)
        if problem:
            raise ResolutionError(problem)

        result = self._interpreter.run(query)
        if result.failed:
            raise ResolutionError(result.error or "Interpreter query failed")

        if not result.paths or not result.paths[0]:
            raise ResolutionError(
                "Python returned an empty list. Cannot determine target path."
            )

        target = result.paths[0]
        state.resolved_packages_cache = target
        logger.debug("Resolved site-packages: %s", target)
        return target
