"""Run the git executable and classify its failures."""

from __future__ import annotations

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from .errors import ExecutionFailed, ExitInfo, ToolNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TOOL_NAME = "git"
_TRIM_CHARS = " \n"


def find_git(name: str = DEFAULT_TOOL_NAME) -> str:
    """Return the path of ``name`` on ``PATH`` or raise ``ToolNotFoundError``."""

    path = shutil.which(name)
    if path is None:
        raise ToolNotFoundError(name)
    return path


class CommandExecutor(ABC):
    """Runs the version-control tool with an argument vector."""

    @property
    @abstractmethod
    def tool_path(self) -> str:
        """Path of the executable being invoked."""

    @abstractmethod
    def execute(self, cwd: Path | str | None, *args: str) -> str:
        """Run the tool in ``cwd`` and return its trimmed standard output.

        Raises ``ExecutionFailed`` on a non-zero exit. Any other failure
        (the tool cannot be launched, pipes cannot be created) propagates
        unchanged.
        """


class GitCommandExecutor(CommandExecutor):
    """Executor backed by a child process per invocation."""

    def __init__(self, tool_path: str) -> None:
        self._tool_path = tool_path

    @property
    def tool_path(self) -> str:
        return self._tool_path

    def execute(self, cwd: Path | str | None, *args: str) -> str:
        argv = [self._tool_path, *args]
        command_line = " ".join(argv)
        # An empty working directory means "inherit the caller's".
        workdir = str(cwd) if cwd else None
        logger.debug("Running '%s' in %s", command_line, workdir or "<cwd>")

        process = subprocess.Popen(
            argv,
            cwd=workdir,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        # communicate() drains both pipes together before reaping the child.
        stdout, stderr = process.communicate()

        if process.returncode != 0:
            exit_info = ExitInfo(process.returncode)
            logger.debug("'%s' failed with %s", command_line, exit_info.describe())
            raise ExecutionFailed(command_line, stderr, exit_info)

        return stdout.decode("utf-8", errors="replace").strip(_TRIM_CHARS)
