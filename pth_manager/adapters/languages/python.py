"""
Python interpreter adapter — asks the active venv's ``python``.

The interpreter on PATH belongs to the active virtual environment, so
its ``site.getsitepackages()`` names the directory the .pth file must go
into.
"""

from __future__ import annotations

import json
import logging
import re
import shutil
import subprocess

from pth_manager.adapters.base import Interpreter
from pth_manager.core.models.probe import ProbeResult, Query, Stopwatch

logger = logging.getLogger(__name__)

_PROGRAMS = {
    "version": "import sys; print('%d.%d.%d' % sys.version_info[:3])",
    "site_packages": "import json, site; print(json.dumps(site.getsitepackages()))",
}


class PythonInterpreter(Interpreter):
    """Runs short ``python -c`` programs in a subprocess."""

    def __init__(self, executable: str = "python"):
        self._executable = executable

    @property
    def executable(self) -> str:
        return self._executable

    def is_available(self) -> bool:
        return shutil.which(self._executable) is not None

    def run(self, query: Query) -> ProbeResult:
        cmd = [self._executable, "-c", _PROGRAMS[query.operation]]
        logger.debug("Probing interpreter: %s", " ".join(cmd))

        watch = Stopwatch()
        try:
            proc = subprocess.run(
                cmd,
                cwd=query.cwd,
                capture_output=True,
                text=True,
                timeout=query.timeout,
            )
        except subprocess.TimeoutExpired:
            return self._fail(query, f"Interpreter timed out after {query.timeout}s")
        except OSError:
            return self._fail(
                query, f"'{self._executable}' executable not found in PATH. Is the Venv active?"
            )

        if proc.returncode != 0:
            return self._fail(
                query,
                proc.stderr.strip() or f"Exit code {proc.returncode}",
                returncode=proc.returncode,
                duration_ms=watch.elapsed_ms,
            )

        output = proc.stdout.strip()
        if query.operation == "version":
            if not re.fullmatch(r"\d+\.\d+\.\d+", output):
                return self._fail(query, f"Unparsable interpreter output: {output!r}")
            return ProbeResult(
                interpreter=self._executable,
                operation="version",
                version=output,
                returncode=0,
                duration_ms=watch.elapsed_ms,
            )

        try:
            paths = json.loads(output)
        except json.JSONDecodeError:
            return self._fail(query, f"Unparsable interpreter output: {output!r}", returncode=0)
        if not isinstance(paths, list) or not all(isinstance(p, str) for p in paths):
            return self._fail(query, f"Expected a list of paths, got: {output!r}", returncode=0)

        return ProbeResult(
            interpreter=self._executable,
            operation=query.operation,
            paths=paths,
            returncode=0,
            duration_ms=watch.elapsed_ms,
        )

    def _fail(self, query: Query, error: str, **fields) -> ProbeResult:
        logger.debug("Interpreter probe failed: %s", error)
        return ProbeResult.refused(self._executable, query.operation, error, **fields)
