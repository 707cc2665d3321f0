"""Template-specific post-materialization edits.

``VariantResolver.resolve`` dispatches on the template identifier, applies
the file edits a template or signing variant needs, and returns the extra
``.env`` content that template contributes (``None`` when it has none).
Unknown templates and signing options are fatal; nothing falls through to a
default.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from create_dapp.errors import UnsupportedSigningOptionError, UnsupportedTemplateError
from create_dapp.models import Selections, SigningOption, TemplateId
from create_dapp.utils import copy_path, load_json, remove_path, save_json


# ---------------------------------------------------------------------------
# Per-template constants
# ---------------------------------------------------------------------------

COMPONENTS_DIR = Path("frontend") / "components"

SIGNING_VARIANT_DIRS: dict[SigningOption, str] = {
    SigningOption.EXPLICIT: "explicitSigning",
    SigningOption.SEAMLESS: "seamlessSigning",
}

SIGNING_VARIANT_FILES: tuple[str, ...] = (
    "Counter.tsx",
    "WalletProvider.tsx",
    "WalletSelector.tsx",
)

MANIFEST_NAME = "package.json"

# Only the seamless signing flow talks to Mizu Wallet.
SEAMLESS_WALLET_DEPENDENCY = "@mizuwallet-sdk/core"

EXTRA_ENV_CONTENT: dict[TemplateId, str | None] = {
    TemplateId.NFT_MINTING: "\n".join([
        'VITE_COLLECTION_CREATOR_ADDRESS=""',
        "#To fill after you create a collection, will be used for the minting page",
        'VITE_COLLECTION_ADDRESS=""',
    ]),
    TemplateId.TOKEN_MINTING: "\n".join([
        'VITE_FA_CREATOR_ADDRESS=""',
        "#To fill after you create a fungible asset, will be used for the minting page",
        'VITE_FA_ADDRESS=""',
    ]),
    TemplateId.TOKEN_STAKING: "\n".join([
        'VITE_FA_ADDRESS=""',
        'VITE_REWARD_CREATOR_ADDRESS=""',
    ]),
    TemplateId.BOILERPLATE: None,
    TemplateId.NEXTJS_BOILERPLATE: None,
}

SEAMLESS_ENV_CONTENT = 'VITE_MIZU_WALLET_APP_ID=""'


def parse_template_id(template: str) -> TemplateId:
    """Map a template path onto its ``TemplateId``.

    Raises:
        UnsupportedTemplateError: If *template* is not a known identifier.
    """
    try:
        return TemplateId(template)
    except ValueError as exc:
        raise UnsupportedTemplateError(template) from exc


def parse_signing_option(value: str | None) -> SigningOption:
    """Map a raw signing option onto ``SigningOption``.

    Raises:
        UnsupportedSigningOptionError: For ``None`` or any unknown value.
    """
    if value is None:
        raise UnsupportedSigningOptionError(value)
    try:
        return SigningOption(value)
    except ValueError as exc:
        raise UnsupportedSigningOptionError(value) from exc


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------


class VariantResolver:
    """Applies template and signing-variant edits inside a materialized project."""

    async def resolve(self, selections: Selections, target_dir: str | Path) -> str | None:
        """Customise *target_dir* for the selected template.

        Args:
            selections: The user's choices.
            target_dir: Root of the materialized project.

        Returns:
            Extra ``.env`` lines for this template, or ``None``.

        Raises:
            UnsupportedTemplateError: For an unknown template identifier.
            UnsupportedSigningOptionError: For an unknown signing option on a
                template that requires one.
        """
        template = parse_template_id(selections.template.path)
        target = Path(target_dir)

        if template is TemplateId.CLICKER_GAME:
            option = parse_signing_option(selections.signing_option)
            return await self._resolve_signing_variant(option, target)

        return EXTRA_ENV_CONTENT[template]

    # -- Signing variants --------------------------------------------------

    async def _resolve_signing_variant(self, option: SigningOption, target: Path) -> str | None:
        components = target / COMPONENTS_DIR
        variant_dir = components / SIGNING_VARIANT_DIRS[option]

        # Files must be extracted before the variant directories are deleted.
        for filename in SIGNING_VARIANT_FILES:
            await asyncio.to_thread(copy_path, variant_dir / filename, components / filename)

        if option is SigningOption.EXPLICIT:
            await self.drop_dependency(target / MANIFEST_NAME, SEAMLESS_WALLET_DEPENDENCY)

        for dirname in SIGNING_VARIANT_DIRS.values():
            await asyncio.to_thread(remove_path, components / dirname)

        if option is SigningOption.SEAMLESS:
            return SEAMLESS_ENV_CONTENT
        return None

    # -- Manifest editing --------------------------------------------------

    async def drop_dependency(self, manifest_path: Path, dependency: str) -> bool:
        """Remove *dependency* from the manifest's ``dependencies``.

        The manifest is rewritten even when the key is absent so its
        formatting is always normalised.

        Returns:
            ``True`` if the dependency was present.
        """
        manifest = await asyncio.to_thread(load_json, manifest_path)
        dependencies = manifest.get("dependencies") or {}
        removed = dependencies.pop(dependency, None) is not None
        await save_json(manifest, manifest_path)
        return removed
