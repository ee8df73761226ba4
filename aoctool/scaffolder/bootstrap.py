"""Creation of a fresh implementation project for a new year."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Protocol

from aoctool.errors import AocToolError
from aoctool.utils import print_step


class BootstrapError(AocToolError):
    """Raised when the project bootstrap command fails."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class ProjectBootstrapper(Protocol):
    """Creates a minimal project skeleton named *name* at *path*."""

    def bootstrap(self, path: Path, name: str) -> None: ...


class UvBootstrapper:
    """Bootstrap the implementation directory with ``uv init``.

    The result is an unpackaged application project (no build backend, so
    nothing expects a module under ``src/``) with its own git repository and
    ``.gitignore``. Day packages are added to it as workspace members.
    """

    def __init__(self, executable: str = "uv", timeout: float = 120.0) -> None:
        self.executable = executable
        self.timeout = timeout

    def command(self, path: Path, name: str) -> list[str]:
        return [
            self.executable,
            "init",
            "--app",
            "--no-package",
            "--vcs",
            "git",
            "--name",
            name,
            str(path),
        ]

    def bootstrap(self, path: Path, name: str) -> None:
        cmd = self.command(path, name)
        cmd_str = " ".join(cmd)
        print_step(f"Bootstrapping [bold]{name}[/bold] in {path}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise BootstrapError(
                f"{self.executable} not found; install it or bootstrap {path} by hand",
                command=cmd_str,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise BootstrapError(
                f"Bootstrap command timed out after {self.timeout}s: {cmd_str}",
                command=cmd_str,
            ) from exc

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise BootstrapError(
                f"Bootstrap command failed (exit {result.returncode}): {cmd_str}\n{stderr}",
                command=cmd_str,
                stderr=stderr,
            )
