"""create-dapp configuration.

Centralised, typed configuration for the scaffolding pipeline and its
collaborators. All settings use Pydantic v2 models so they are validated at
construction time and can be built from environment variables without
boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from create_dapp.models import Network, TemplateId

_PACKAGE_TEMPLATES_DIR = Path(__file__).parent / "templates"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY


class FaucetConfig(BaseModel):
    """Funding of the freshly generated module publisher account."""

    urls: dict[Network, str] = Field(
        default_factory=lambda: {
            Network.DEVNET: "https://faucet.devnet.aptoslabs.com",
            Network.TESTNET: "https://faucet.testnet.aptoslabs.com",
        }
    )
    fundable_networks: list[Network] = Field(default=[Network.DEVNET])
    fund_amount: int = Field(default=100_000_000, ge=0, description="Amount in octas")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")

    def url_for(self, network: Network) -> str | None:
        """Return the faucet URL for *network* if it should be funded."""
        if network not in self.fundable_networks:
            return None
        return self.urls.get(network)


class TelemetryConfig(BaseModel):
    """Google Analytics 4 measurement-protocol settings."""

    enabled: bool = Field(default=True)
    measurement_id: str = Field(default="")
    api_secret: str = Field(default="")
    endpoint: str = Field(default="https://www.google-analytics.com/mp/collect")
    timeout: int = Field(default=5, ge=1)

    @property
    def is_configured(self) -> bool:
        """Telemetry only fires when enabled and fully configured."""
        return self.enabled and bool(self.measurement_id) and bool(self.api_secret)


class Config(BaseModel):
    """Global create-dapp configuration.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and passed to ``ScaffoldPipeline``.
    """

    templates_dir: Path = Field(default=_PACKAGE_TEMPLATES_DIR)
    output_dir: Path = Field(default_factory=Path.cwd)
    default_project_name: str = Field(default="my-aptos-dapp")
    command_name: str = Field(default="create-dapp")
    skip_install: bool = Field(default=False)
    install_timeout: int = Field(default=900, ge=30, description="Dependency install timeout in seconds")
    faucet: FaucetConfig = Field(default_factory=FaucetConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def template_path(self, template: str | TemplateId) -> Path:
        """Directory holding the files of *template*."""
        name = template.value if isinstance(template, TemplateId) else template
        return self.templates_dir / name

    def target_path(self, project_name: str | None) -> Path:
        """Directory the project is scaffolded into."""
        return self.output_dir / (project_name or self.default_project_name)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CREATE_DAPP_TEMPLATES_DIR, CREATE_DAPP_OUTPUT_DIR,
            CREATE_DAPP_SKIP_INSTALL, CREATE_DAPP_INSTALL_TIMEOUT,
            CREATE_DAPP_FAUCET_AMOUNT, CREATE_DAPP_TELEMETRY_DISABLED,
            CREATE_DAPP_GA_MEASUREMENT_ID, CREATE_DAPP_GA_API_SECRET.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_DAPP_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["CREATE_DAPP_TEMPLATES_DIR"])
        if os.environ.get("CREATE_DAPP_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CREATE_DAPP_OUTPUT_DIR"])
        if os.environ.get("CREATE_DAPP_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["CREATE_DAPP_INSTALL_TIMEOUT"])

        faucet_kwargs: dict[str, Any] = {}
        if os.environ.get("CREATE_DAPP_FAUCET_AMOUNT"):
            faucet_kwargs["fund_amount"] = int(os.environ["CREATE_DAPP_FAUCET_AMOUNT"])

        telemetry = TelemetryConfig(
            enabled=not _env_flag("CREATE_DAPP_TELEMETRY_DISABLED"),
            measurement_id=os.environ.get("CREATE_DAPP_GA_MEASUREMENT_ID", ""),
            api_secret=os.environ.get("CREATE_DAPP_GA_API_SECRET", ""),
        )

        return cls(
            skip_install=_env_flag("CREATE_DAPP_SKIP_INSTALL"),
            faucet=FaucetConfig(**faucet_kwargs),
            telemetry=telemetry,
            **kwargs,
        )
