"""CLI module for navperf script runs."""

from navperf.cli.loader import (
    EXAMPLE_SCRIPT,
    NativeMarkDefinition,
    NavigationScript,
    ScriptLoader,
    StepDefinition,
)
from navperf.cli.runner import ScriptResult, ScriptRunner, TextRenderer

__all__ = [
    "ScriptLoader",
    "NavigationScript",
    "StepDefinition",
    "NativeMarkDefinition",
    "EXAMPLE_SCRIPT",
    "ScriptRunner",
    "ScriptResult",
    "TextRenderer",
]
