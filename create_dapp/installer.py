"""Installs the generated project's JavaScript dependencies.

The package manager is the one the user ran the scaffolder with, as
reported by ``npm_config_user_agent`` (``pnpm/9.1.0 npm/? node/v20 ...``),
falling back to ``npm``.
"""

from __future__ import annotations

import os
from pathlib import Path

from create_dapp.errors import DependencyInstallError
from create_dapp.utils import run_command

SUPPORTED_PACKAGE_MANAGERS: tuple[str, ...] = ("npm", "pnpm", "yarn", "bun")
DEFAULT_PACKAGE_MANAGER = "npm"


def detect_package_manager(user_agent: str | None = None) -> str:
    """Return the package manager named in an npm user agent string."""
    if user_agent is None:
        user_agent = os.environ.get("npm_config_user_agent", "")
    if not user_agent:
        return DEFAULT_PACKAGE_MANAGER
    name = user_agent.split(" ", 1)[0].split("/", 1)[0].strip().lower()
    if name in SUPPORTED_PACKAGE_MANAGERS:
        return name
    return DEFAULT_PACKAGE_MANAGER


class DependencyInstaller:
    """Runs ``<package manager> install`` inside the project directory."""

    def __init__(self, package_manager: str | None = None, timeout: int = 900) -> None:
        self.package_manager = package_manager or detect_package_manager()
        self.timeout = timeout

    @property
    def command(self) -> list[str]:
        return [self.package_manager, "install"]

    async def install(self, project_path: str | Path) -> None:
        """Install dependencies in *project_path*.

        Raises:
            DependencyInstallError: If the command exits non-zero or times out.
        """
        returncode, _, stderr = await run_command(
            self.command,
            cwd=project_path,
            timeout=self.timeout,
        )
        if returncode != 0:
            raise DependencyInstallError(" ".join(self.command), returncode, stderr)
