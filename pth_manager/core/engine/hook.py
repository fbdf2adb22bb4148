"""
Directory-change hook — the trigger fired after every ``cd``.

How the hook is wired into a shell does not matter here (see
ui.cli.shell for the Bash ``cd`` override); it receives the new
directory and the directory change's own exit status.
"""

from __future__ import annotations

import logging

from pth_manager.core.engine.controller import EvaluationResult, ScopeController
from pth_manager.core.errors import EXIT_OK
from pth_manager.core.models.config import ScopeConfig
from pth_manager.core.models.state import RuntimeState

logger = logging.getLogger(__name__)


class DirectoryChangeHook:
    """Forward successful directory changes to the ScopeController."""

    def __init__(self, controller: ScopeController):
        self._controller = controller

    def on_directory_change(
        self,
        new_dir: str,
        cd_status: int,
        config: ScopeConfig,
        state: RuntimeState,
    ) -> tuple[int, EvaluationResult | None]:
        """Handle one directory change.

        Returns:
            (exit_code, result). A failed ``cd`` returns its own status
            unchanged and no result; the controller is not consulted.
        """
        if cd_status != 0:
            logger.debug("Directory change failed with status %d. Skipping manager logic.",
                         cd_status)
            return cd_status, None

        if not config.inject_trigger:
            return EXIT_OK, None

        logger.debug("Injection trigger is active. Evaluating %s", new_dir)
        result = self._controller.evaluate(new_dir, config, state)
        return result.exit_code, result
