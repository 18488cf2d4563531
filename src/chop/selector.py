"""Interactive selection through an external fuzzy finder.

The contract is line based: candidates are written to the tool's stdin, one per
line, and every line it prints on stdout is a selection. The default tool is
``fzf --multi``; any command honouring the same contract works.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from typing import Protocol

from chop.errors import SelectorUnavailable
from chop.files import ENCODING, ERRORS

logger = logging.getLogger(__name__)

DEFAULT_SELECTOR_COMMAND = "fzf --multi"

# fzf: 1 = no match, 130 = interrupted by the user
_EMPTY_SELECTION_CODES = frozenset({1, 130})


class Selector(Protocol):
    def select(self, candidates: Sequence[str]) -> list[str]: ...


class NullSelector:
    """Selects nothing."""

    def select(self, candidates: Sequence[str]) -> list[str]:
        return []


class CommandSelector:
    """Run an external command and read the chosen lines back."""

    def __init__(self, command: list[str] | str = DEFAULT_SELECTOR_COMMAND) -> None:
        self._command = _resolve_command(_normalize_command(command))

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def select(self, candidates: Sequence[str]) -> list[str]:
        payload = "".join(f"{line}\n" for line in candidates)
        logger.debug(
            "selector_started",
            extra={"command": self._command, "candidates": len(candidates)},
        )
        try:
            result = subprocess.run(
                self._command,
                input=payload.encode(ENCODING, ERRORS),
                stdout=subprocess.PIPE,
            )
        except FileNotFoundError:
            raise SelectorUnavailable(
                f"selector not found: {self._command[0]}"
            ) from None
        except OSError as e:
            raise SelectorUnavailable(
                f"failed to launch selector {self._command[0]}: {e}"
            ) from e

        if result.returncode in _EMPTY_SELECTION_CODES:
            logger.info("selector_empty", extra={"returncode": result.returncode})
            return []
        if result.returncode != 0:
            raise SelectorUnavailable(
                f"selector {self._command[0]} exited with status {result.returncode}"
            )

        output = result.stdout.decode(ENCODING, ERRORS)
        return [line.rstrip("\r") for line in output.split("\n") if line.rstrip("\r")]


def _normalize_command(command: list[str] | str) -> list[str]:
    if isinstance(command, str):
        parts = shlex.split(command)
    elif isinstance(command, list):
        parts = [str(item).strip() for item in command if str(item).strip()]
    else:
        raise ValueError("selector command must be a string or list of strings")
    if not parts:
        raise ValueError("selector command is required")
    return parts


def _resolve_command(parts: list[str]) -> list[str]:
    """Expand ``~`` and look bare names up on PATH.

    An unresolved name is kept as given; running it reports the missing tool.
    """
    executable = os.path.expanduser(parts[0])
    if os.path.sep not in executable:
        executable = shutil.which(executable) or executable
    return [executable, *parts[1:]]
