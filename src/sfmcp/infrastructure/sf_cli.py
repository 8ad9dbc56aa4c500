"""Command execution adapter for the external Salesforce CLI.

One subprocess per call; the caller blocks until it exits. There is no
timeout or cancellation, so callers that need bounded latency must wrap
the call themselves.

Raw process output is classified by :func:`classify_output`, in strict
priority order:

1. Non-zero exit (or launch error): structured error from stderr,
   else the raw stderr text.
2. Zero exit, stderr present, stdout empty: same as 1.
3. stdout parses as JSON: success with the parsed value.
4. Otherwise: success with ``{"message": <trimmed stdout>}``.

Plain-text success output therefore never turns into a failure.
"""

from __future__ import annotations

import json
import logging
import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, NoReturn

from sfmcp.domain.errors import ExternalCommandFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandSuccess:
    """The command succeeded; *payload* is parsed JSON or a message wrapper."""

    payload: Any
    ok: ClassVar[bool] = True

    def unwrap(self) -> Any:
        return self.payload


@dataclass(frozen=True)
class CommandFailure:
    """The command failed; *message* is the external diagnostic, verbatim."""

    message: str
    ok: ClassVar[bool] = False

    def unwrap(self) -> NoReturn:
        raise ExternalCommandFailure(self.message)


CommandOutcome = CommandSuccess | CommandFailure
Runner = Callable[..., CommandOutcome]


def _error_message(text: str) -> str:
    """Pull ``message`` out of a structured error document, else return *text*."""
    try:
        parsed = json.loads(text)
    except ValueError:
        return text
    if isinstance(parsed, dict) and parsed.get("message"):
        return str(parsed["message"])
    return text


def classify_output(returncode: int | None, stdout: str, stderr: str) -> CommandOutcome:
    """Turn raw process output into a CommandOutcome.

    *returncode* is None when the process could not be launched; *stderr*
    then carries the launch error text.
    """
    error_text = stderr.strip()

    if returncode is None or returncode != 0:
        if not error_text:
            error_text = (
                "Command could not be started"
                if returncode is None
                else f"Command failed with exit code {returncode}"
            )
        return CommandFailure(_error_message(error_text))

    if error_text and not stdout.strip():
        return CommandFailure(_error_message(error_text))

    try:
        return CommandSuccess(json.loads(stdout))
    except ValueError:
        return CommandSuccess({"message": stdout.strip()})


def execute(command_line: str, *, cwd: Path | None = None) -> CommandOutcome:
    """Run *command_line* through the shell and classify the result."""
    logger.debug("Executing: %s", command_line)
    try:
        completed = subprocess.run(
            command_line,
            shell=True,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        logger.debug("Launch failed for %s: %s", command_line, exc)
        return classify_output(None, "", str(exc))

    outcome = classify_output(completed.returncode, completed.stdout, completed.stderr)
    logger.debug("Exit %s for %s (ok=%s)", completed.returncode, command_line, outcome.ok)
    return outcome


class SfCli:
    """The configured ``sf`` executable bound to a working directory.

    Arguments are shell-quoted into a single command line and handed to
    *runner* (``execute`` unless a test substitutes a fake).
    """

    def __init__(
        self,
        executable: str = "sf",
        *,
        cwd: Path | None = None,
        runner: Runner | None = None,
    ) -> None:
        self._executable = shlex.split(executable)
        self._cwd = cwd
        self._runner = runner or execute

    def command_line(self, *args: str) -> str:
        return shlex.join([*self._executable, *args])

    def run(self, *args: str, json_output: bool = True) -> CommandOutcome:
        """Run ``sf <args>``, appending ``--json`` unless *json_output* is False."""
        argv = [*args, "--json"] if json_output else list(args)
        return self._runner(self.command_line(*argv), cwd=self._cwd)
