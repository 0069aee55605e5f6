"""Helpers for talking to the workflow runner from inside a job step."""

from actions_toolkit.command import Command, escape_data, escape_property, issue_command
from actions_toolkit.core import Core, ExitCode, RequiredValueMissing

__version__ = "0.1.0"

__all__ = [
    "Command",
    "Core",
    "ExitCode",
    "RequiredValueMissing",
    "escape_data",
    "escape_property",
    "issue_command",
]
