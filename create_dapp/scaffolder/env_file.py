"""Writes the generated project's ``.env`` file.

The file holds the freshly created module publisher account followed, after
a blank line, by whatever placeholder keys the selected template needs.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

from create_dapp.models import Framework, GeneratedAccount, Selections

from .templates import TemplateRenderer

if TYPE_CHECKING:
    from create_dapp.accounts import AccountProvisioner


ENV_FILENAME = ".env"

# (public prefix, private prefix) per framework.  Next.js only ships
# ``NEXT_PUBLIC_`` variables to the browser, so the private key drops it.
ENV_PREFIXES: dict[Framework, tuple[str, str]] = {
    Framework.VITE: ("VITE_", "VITE_"),
    Framework.NEXTJS: ("NEXT_PUBLIC_", "NEXT_"),
}


def format_env_variables(
    selections: Selections,
    account: GeneratedAccount,
    project_name: str,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the base ``KEY=value`` block for *account*.

    The returned text has no trailing newline.
    """
    renderer = renderer or TemplateRenderer()
    public_prefix, private_prefix = ENV_PREFIXES[Framework(selections.framework)]
    content = renderer.render(
        "env.j2",
        {
            "project_name": project_name,
            "network": selections.network.value,
            "account": account,
            "public_prefix": public_prefix,
            "private_prefix": private_prefix,
        },
    )
    return content.rstrip("\n")


def build_env_content(base: str, additional_content: str | None = None) -> str:
    """Join the base block and the template block with one blank line."""
    if additional_content:
        return f"{base}\n\n{additional_content.strip()}\n"
    return f"{base}\n"


class EnvironmentSynthesizer:
    """Creates the publisher account and writes it into ``.env``."""

    def __init__(
        self,
        provisioner: "AccountProvisioner",
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.provisioner = provisioner
        self.renderer = renderer or TemplateRenderer()

    async def create_account(self, selections: Selections) -> GeneratedAccount:
        """Ask the provisioner for exactly one new account."""
        return await self.provisioner.create_module_publisher_account(selections)

    async def write_env_file(
        self,
        selections: Selections,
        account: GeneratedAccount,
        target_dir: str | Path,
        project_name: str,
        additional_content: str | None = None,
    ) -> Path:
        """Serialise *account* plus *additional_content* into ``<target>/.env``."""
        base = format_env_variables(selections, account, project_name, self.renderer)
        content = build_env_content(base, additional_content)
        env_path = Path(target_dir) / ENV_FILENAME
        await asyncio.to_thread(env_path.write_text, content, "utf-8")
        return env_path

    async def generate_env_file(
        self,
        selections: Selections,
        target_dir: str | Path,
        project_name: str,
        additional_content: str | None = None,
    ) -> Path:
        """Create the account and write the ``.env`` file in one call.

        Convenience wrapper over :meth:`create_account` and
        :meth:`write_env_file`.  ``ScaffoldPipeline`` calls the two halves
        separately so each gets its own step and spinner.

        Returns:
            Path of the written ``.env`` file (overwritten if present).
        """
        account = await self.create_account(selections)
        return await self.write_env_file(
            selections, account, target_dir, project_name, additional_content
        )
