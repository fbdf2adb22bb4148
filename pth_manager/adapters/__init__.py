"""Adapters — bindings to the virtual environment's interpreter."""

from pth_manager.adapters.base import Interpreter
from pth_manager.adapters.languages.python import PythonInterpreter
from pth_manager.adapters.mock import FakeInterpreter

__all__ = [
    "FakeInterpreter",
    "Interpreter",
    "PythonInterpreter",
]
