"""Accessors for job inputs, outputs, state, and log commands.

Everything here either reads the step's environment or writes workflow
commands to stdout. The environment is never modified in-process: exported
variables, PATH entries, outputs, and saved state take effect for later
steps only.

The module-level functions operate on the live process. Construct a Core
with an explicit environment, stream, and exit function to run the same
operations against anything else (tests, local dry runs).
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TextIO, TypeVar

from actions_toolkit.command import issue_command


T = TypeVar("T")

TRUTHY_VALUES = ("true", "1", "yes")


class ExitCode:
    """Process exit codes for an action."""

    SUCCESS = 0
    FAILURE = 1


class RequiredValueMissing(ValueError):
    """Raised when a required input or variable is blank."""

    def __init__(self, name: str, kind: str = "Variable") -> None:
        self.name = name
        self.kind = kind
        super().__init__(f"{kind} required and not supplied: {name}")


def input_key(name: str) -> str:
    """Environment variable name the runner uses for input `name`."""
    return "INPUT_" + name.replace(" ", "_").upper()


class Core:
    """Workflow command and environment accessors bound to one environment.

    Args:
        env: Mapping to read variables from. Defaults to os.environ.
        stream: Where commands are written. Defaults to sys.stdout, looked
            up on every write so redirection after construction is honored.
        exit_fn: Called with the exit code by set_failed. Defaults to sys.exit.
    """

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        stream: TextIO | None = None,
        exit_fn: Callable[[int], Any] | None = None,
    ) -> None:
        self._env = env
        self._stream = stream
        self._exit_fn = exit_fn

    @property
    def env(self) -> Mapping[str, str]:
        return self._env if self._env is not None else os.environ

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _issue(self, command: str, properties: Mapping[str, Any] | None = None, message: Any = "") -> None:
        issue_command(command, properties, message, stream=self.stream)

    # Variables

    def export_variable(self, name: str, value: Any) -> None:
        """Set an environment variable for subsequent steps in the job.

        The current process environment is left untouched.
        """
        self._issue("set-env", {"name": name}, value)

    def get_variable(self, name: str, required: bool = False) -> str:
        """Return the trimmed value of an environment variable.

        Raises:
            RequiredValueMissing: If required and the value is blank.
        """
        val = self.env.get(name, "").strip()
        if required and not val:
            raise RequiredValueMissing(name, "Variable")
        return val

    def set_secret(self, secret: str) -> None:
        """Register a value to be masked in subsequent log output."""
        self._issue("add-mask", message=secret)

    def add_path(self, input_path: str) -> None:
        """Prepend a directory to PATH for subsequent steps only."""
        self._issue("add-path", message=input_path)

    def get_input(self, name: str, required: bool = False) -> str:
        """Return the trimmed value of a step input.

        Input names are case-insensitive and spaces map to underscores,
        so "My Input" reads INPUT_MY_INPUT.

        Raises:
            RequiredValueMissing: If required and the value is blank.
        """
        val = self.env.get(input_key(name), "").strip()
        if required and not val:
            raise RequiredValueMissing(name, "Input")
        return val

    def get_bool_input(self, name: str, default: bool = False) -> bool:
        """Read a boolean step input; a blank input yields `default`."""
        val = self.get_input(name)
        if not val:
            return default
        return val.lower() in TRUTHY_VALUES

    def set_output(self, name: str, value: Any) -> None:
        """Set a step output."""
        self._issue("set-output", {"name": name}, value)

    # Results

    def set_failed(self, message: str) -> None:
        """Report an error and exit with ExitCode.FAILURE."""
        self.error(message)
        exit_fn = self._exit_fn if self._exit_fn is not None else sys.exit
        exit_fn(ExitCode.FAILURE)

    # Logging

    def is_debug(self) -> bool:
        """Whether step debug logging is enabled for this run."""
        return self.env.get("RUNNER_DEBUG") == "1"

    def debug(self, message: str) -> None:
        self._issue("debug", message=message)

    def error(self, message: str) -> None:
        self._issue("error", message=message)

    def warning(self, message: str) -> None:
        self._issue("warning", message=message)

    def info(self, message: str) -> None:
        """Write a plain log line with no command framing."""
        self.stream.write(f"{message}\n")

    def start_group(self, name: str) -> None:
        """Begin a foldable output group; close it with end_group."""
        self._issue("group", message=name)

    def end_group(self) -> None:
        self._issue("endgroup")

    def group(self, name: str, fn: Callable[[], T]) -> T:
        """Run fn inside an output group and return its result.

        The group is closed even if fn raises.
        """
        self.start_group(name)
        try:
            return fn()
        finally:
            self.end_group()

    @contextmanager
    def grouped(self, name: str) -> Iterator[None]:
        """Context manager form of group()."""
        self.start_group(name)
        try:
            yield
        finally:
            self.end_group()

    # Wrapper action state

    def save_state(self, name: str, value: Any) -> None:
        """Save state for this action's post-job step."""
        self._issue("save-state", {"name": name}, value)

    def get_state(self, name: str) -> str:
        """Return state saved by this action's main step, untrimmed."""
        return self.env.get(f"STATE_{name}", "")


_default = Core()

export_variable = _default.export_variable
get_variable = _default.get_variable
set_secret = _default.set_secret
add_path = _default.add_path
get_input = _default.get_input
get_bool_input = _default.get_bool_input
set_output = _default.set_output
set_failed = _default.set_failed
is_debug = _default.is_debug
debug = _default.debug
error = _default.error
warning = _default.warning
info = _default.info
start_group = _default.start_group
end_group = _default.end_group
group = _default.group
grouped = _default.grouped
save_state = _default.save_state
get_state = _default.get_state
