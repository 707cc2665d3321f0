"""Pydantic v2 models shared by the scaffolder, its collaborators and the CLI.

Defines the closed enumerations used for template/variant dispatch, the
``Selections`` input value, the generated account, and the ``ScaffoldResult``
returned by the pipeline.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TemplateId(str, Enum):
    """Identifiers of the bundled templates. Each value is its directory name."""
    NFT_MINTING = "nft-minting-dapp-template"
    TOKEN_MINTING = "token-minting-dapp-template"
    TOKEN_STAKING = "token-staking-dapp-template"
    BOILERPLATE = "boilerplate-template"
    NEXTJS_BOILERPLATE = "nextjs-boilerplate-template"
    CLICKER_GAME = "clicker-game-tg-mini-app-template"


class SigningOption(str, Enum):
    """Transaction signing modes offered by the clicker game template."""
    EXPLICIT = "explicit"
    SEAMLESS = "seamless"


class Network(str, Enum):
    """Aptos networks a project can target."""
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"


class Framework(str, Enum):
    """Frontend frameworks. Decides the env variable prefix."""
    VITE = "vite"
    NEXTJS = "nextjs"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

class TemplateInfo(BaseModel):
    """Describes a selectable template."""
    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Template identifier and on-disk directory name")
    name: str = Field(..., description="Human-readable template name")
    doc: str = Field(..., description="Documentation URL")
    video: Optional[str] = Field(default=None, description="Optional walkthrough video URL")
    framework: Framework = Field(default=Framework.VITE, description="Framework the template is built on")


_DOCS_BASE = "https://aptos.dev/en/build/create-aptos-dapp/templates"

TEMPLATES: dict[TemplateId, TemplateInfo] = {
    TemplateId.BOILERPLATE: TemplateInfo(
        path=TemplateId.BOILERPLATE.value,
        name="Boilerplate Template",
        doc=f"{_DOCS_BASE}/boilerplate",
    ),
    TemplateId.NEXTJS_BOILERPLATE: TemplateInfo(
        path=TemplateId.NEXTJS_BOILERPLATE.value,
        name="Boilerplate Template",
        doc=f"{_DOCS_BASE}/boilerplate",
        framework=Framework.NEXTJS,
    ),
    TemplateId.NFT_MINTING: TemplateInfo(
        path=TemplateId.NFT_MINTING.value,
        name="NFT minting dapp",
        doc=f"{_DOCS_BASE}/nft-minting",
    ),
    TemplateId.TOKEN_MINTING: TemplateInfo(
        path=TemplateId.TOKEN_MINTING.value,
        name="Token minting dapp",
        doc=f"{_DOCS_BASE}/token-minting",
    ),
    TemplateId.TOKEN_STAKING: TemplateInfo(
        path=TemplateId.TOKEN_STAKING.value,
        name="Token staking dapp",
        doc=f"{_DOCS_BASE}/staking",
    ),
    TemplateId.CLICKER_GAME: TemplateInfo(
        path=TemplateId.CLICKER_GAME.value,
        name="Clicker game Telegram Mini App",
        doc=f"{_DOCS_BASE}/telegram-clicker-game",
    ),
}


def get_template(template: str | TemplateId) -> TemplateInfo:
    """Look up a bundled template by identifier.

    Raises:
        KeyError: If *template* is not a known identifier.
    """
    try:
        return TEMPLATES[TemplateId(template)]
    except ValueError as exc:
        raise KeyError(str(template)) from exc


# ---------------------------------------------------------------------------
# Pipeline input
# ---------------------------------------------------------------------------

class Selections(BaseModel):
    """Everything the user chose. Never mutated once built.

    ``signing_option`` is kept as a raw string so that an unknown value is
    rejected by the variant resolver rather than at construction time.
    """
    model_config = ConfigDict(frozen=True)

    project_name: Optional[str] = Field(default=None, description="Target directory name")
    template: TemplateInfo
    network: Network = Field(default=Network.TESTNET)
    framework: Framework = Field(default=Framework.VITE)
    signing_option: Optional[str] = Field(default=None)


# ---------------------------------------------------------------------------
# Collaborator outputs
# ---------------------------------------------------------------------------

class GeneratedAccount(BaseModel):
    """Module publisher account created for a single scaffold run."""
    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="0x-prefixed account address")
    public_key: str = Field(..., description="0x-prefixed Ed25519 public key")
    private_key: str = Field(..., description="AIP-80 formatted Ed25519 private key")
    funded: bool = Field(default=False, description="Whether the faucet funded the account")


class TelemetryEvent(BaseModel):
    """Payload recorded once per successful scaffold."""
    command: str
    project_name: Optional[str] = None
    template: str
    framework: str
    network: str
    signing_option: Optional[str] = None


# ---------------------------------------------------------------------------
# Pipeline output
# ---------------------------------------------------------------------------

class ScaffoldResult(BaseModel):
    """Outcome of ``ScaffoldPipeline.run``."""
    success: bool = Field(default=False)
    project_path: Optional[Path] = Field(default=None)
    failed_step: Optional[str] = Field(default=None, description="Step that raised, if any")
    error: Optional[str] = Field(default=None, description="Error message on failure")
    steps_completed: list[str] = Field(default_factory=list)
    duration: str = Field(default="")
