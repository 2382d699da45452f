"""Runs the Go formatter and import resolver over a generated file."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Sequence

from ..errors import PostProcessError
from ..logging import get_logger

logger = get_logger("postproc")


class PostProcessor:
    """Invokes each configured command in place on the output path."""

    def __init__(
        self,
        commands: Sequence[Sequence[str]],
        runner: Callable[..., str] | None = None,
    ) -> None:
        self.commands: List[List[str]] = [list(command) for command in commands]
        self._runner = runner or self._default_runner

    def run(self, path: Path) -> None:
        """Format ``path``; the first failing command aborts the run.

        The file is left on disk as written when a command fails.
        """
        for command in self.commands:
            args = [*command, str(path)]
            logger.debug("Running %s", " ".join(args))
            try:
                self._runner(args)
            except FileNotFoundError as exc:
                raise PostProcessError(
                    f"{command[0]} not found: {exc}", command=args
                ) from exc
            except subprocess.CalledProcessError as exc:
                detail = (exc.stderr or exc.stdout or "").strip()
                message = f"{' '.join(args)} exited with status {exc.returncode}"
                if detail:
                    message = f"{message}: {detail}"
                raise PostProcessError(message, command=args) from exc

    @staticmethod
    def _default_runner(args: Iterable[str]) -> str:
        completed = subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=True,
        )
        return completed.stdout


__all__ = ["PostProcessor"]
