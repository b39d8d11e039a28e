"""Node dependency installation for a generated theme.

The theme pins the Node version it was built with in ``.nvmrc``. Dependencies
are only installed when the Node binary on ``PATH`` reports exactly that
version; otherwise the user gets a warning with manual instructions.

This is the one blocking stage of the install pipeline: ``npm install`` runs
through ``subprocess.run`` and holds the calling thread until npm exits. The
pipeline calls :meth:`DependencyInstaller.install` through
``asyncio.to_thread`` so the spinners keep animating meanwhile.
"""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from hozokit_generator.errors import DependencyInstallError, VersionMismatchWarning
from hozokit_generator.utils import read_version_marker


@dataclass
class InstallResult:
    """Outcome of a dependency install attempt."""

    installed: bool
    expected_version: Optional[str] = None
    current_version: Optional[str] = None
    warning: Optional[str] = None
    error: Optional[DependencyInstallError] = None


def current_node_version(executable: str = "node") -> str | None:
    """Return ``node --version`` (e.g. ``"v14.15.1"``), or ``None`` if unavailable."""
    resolved = shutil.which(executable)
    if resolved is None:
        return None
    try:
        completed = subprocess.run(
            [resolved, "--version"],
            capture_output=True,
            text=True,
            timeout=30,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.strip() or None


class DependencyInstaller:
    """Runs the package manager in a theme folder when the Node version matches."""

    def __init__(
        self,
        command: Sequence[str] = ("npm", "install"),
        runtime_version: Callable[[], str | None] = current_node_version,
        timeout: float | None = None,
    ) -> None:
        self.command = list(command)
        self.runtime_version = runtime_version
        self.timeout = timeout

    def install(self, theme_dir: str | Path, marker_path: str | Path) -> InstallResult:
        """Install dependencies in *theme_dir* if *marker_path* matches the running Node.

        The marker content and the running version are compared verbatim
        once surrounding whitespace is stripped (``v14.15.1`` == ``v14.15.1``).

        Returns:
            ``InstallResult.installed`` is ``True`` only when the command ran
            and exited with status 0. A mismatch or missing marker fills in
            ``warning``; a failed command fills in ``error``. Nothing is raised.
        """
        directory = Path(theme_dir)
        marker = Path(marker_path)
        command_text = " ".join(self.command)

        expected = read_version_marker(marker)
        if expected is None:
            return InstallResult(
                installed=False,
                warning=(
                    f"Avoided dependency install because {marker} was not found.\n"
                    f"Change directory to {directory} and run {command_text}"
                ),
            )

        current = self.runtime_version()
        if current is None:
            return InstallResult(
                installed=False,
                expected_version=expected,
                warning=(
                    "Avoided dependency install because Node could not be found.\n"
                    f"Please install Node {expected}, change directory to {directory} "
                    f"and run {command_text}"
                ),
            )

        current = current.strip()
        if current != expected:
            mismatch = VersionMismatchWarning(expected, current)
            return InstallResult(
                installed=False,
                expected_version=expected,
                current_version=current,
                warning=(
                    f"{mismatch}\n"
                    f"Please set Node to {expected}, change directory to {directory} "
                    f"and run {command_text}\n"
                    "Alternatively, attempt to install dependencies with your current "
                    f"version following the steps above but keeping Node {current} set."
                ),
            )

        try:
            self.run(directory)
        except DependencyInstallError as exc:
            return InstallResult(
                installed=False,
                expected_version=expected,
                current_version=current,
                error=exc,
            )
        return InstallResult(installed=True, expected_version=expected, current_version=current)

    def run(self, cwd: Path) -> None:
        """Run the install command in *cwd* with its output suppressed.

        The working directory of this process is left untouched.

        Raises:
            DependencyInstallError: If the command is missing, times out or
                exits with a non-zero status.
        """
        executable = shutil.which(self.command[0]) or self.command[0]
        cmd = [executable, *self.command[1:]]
        command_text = " ".join(self.command)

        try:
            completed = subprocess.run(
                cmd,
                cwd=str(cwd),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise DependencyInstallError(
                f"Could not install dependencies: '{self.command[0]}' was not found."
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise DependencyInstallError(
                f"Could not install dependencies: {command_text} timed out after {self.timeout}s."
            ) from exc
        except OSError as exc:
            raise DependencyInstallError(
                f"Could not install dependencies via {command_text}: {exc}"
            ) from exc

        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            raise DependencyInstallError(
                f"Could not install dependencies via {command_text} "
                f"(exit {completed.returncode}).\n{stderr[-2000:]}",
                returncode=completed.returncode,
                stderr=stderr,
            )
