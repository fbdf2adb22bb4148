"""
Cleanup executor — remove the injection file.

Does not touch RuntimeState; the controller resets the state whatever
the outcome here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pth_manager.core.errors import CleanupError

logger = logging.getLogger(__name__)


def cleanup(target_dir: str, file_name: str) -> bool:
    """Delete ``target_dir/file_name`` if it exists.

    Returns:
        True if a file was removed, False if it was already absent.

    Raises:
        CleanupError: The file exists but could not be removed.
    """
    pth_file = Path(target_dir) / file_name
    logger.debug("Attempting to clean up PTH file: %s", pth_file)

    if not pth_file.is_file():
        logger.debug("PTH file not found during cleanup: %s (already clean)", pth_file)
        return False

    try:
        pth_file.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise CleanupError(
            f"Failed to remove PTH file at {pth_file}. Check permissions. ({e})",
            path=str(pth_file),
        ) from e

    logger.info("Removed stale PTH file: %s", pth_file)
    return True
