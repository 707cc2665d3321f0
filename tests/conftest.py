"""Shared pytest fixtures for the create-dapp test suite.

Provides reusable fixtures for:
- Small on-disk template trees (plain and clicker-style signing variants)
- Config objects pointing at temporary directories
- Selections built from the template catalog
- Fake account provisioner, dependency installer and telemetry client
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from create_dapp.config import Config, TelemetryConfig
from create_dapp.models import (
    TEMPLATES,
    Framework,
    GeneratedAccount,
    Network,
    Selections,
    TemplateId,
    TemplateInfo,
)


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------

VARIANT_FILES = ("Counter.tsx", "WalletProvider.tsx", "WalletSelector.tsx")


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def build_plain_template(root: Path) -> Path:
    """A template containing every excluded name next to real files."""
    root.mkdir(parents=True, exist_ok=True)
    _write(root / "_gitignore", "node_modules\n.env\n")
    _write(root / "README.md", "# Template\n")
    _write(
        root / "package.json",
        json.dumps({"name": "template", "dependencies": {"react": "^18.3.1"}}, indent=2),
    )
    _write(root / "frontend" / "App.tsx", "export default function App() {}\n")
    _write(root / "frontend" / ".DS_Store", "junk")
    _write(root / "frontend" / "node_modules" / "dep" / "index.js", "module.exports = 1;\n")
    # Excluded top-level entries
    _write(root / ".DS_Store", "junk")
    _write(root / ".env", "SECRET=1\n")
    _write(root / "package-lock.json", "{}\n")
    _write(root / "node_modules" / "react" / "index.js", "module.exports = {};\n")
    _write(root / "build" / "bundle.js", "console.log(1);\n")
    _write(root / ".aptos" / "config.yaml", "profiles: {}\n")
    return root


def build_clicker_template(root: Path) -> Path:
    """A template with explicit/seamless signing variant directories."""
    root.mkdir(parents=True, exist_ok=True)
    _write(root / "_gitignore", "node_modules\n")
    _write(
        root / "package.json",
        json.dumps(
            {
                "name": "clicker",
                "version": "0.0.0",
                "dependencies": {
                    "@aptos-labs/ts-sdk": "^1.33.1",
                    "@mizuwallet-sdk/core": "^1.4.0",
                    "react": "^18.3.1",
                },
            },
            indent=4,
        ),
    )
    components = root / "frontend" / "components"
    for name in VARIANT_FILES:
        _write(components / name, f"// default {name}\n")
        _write(components / "explicitSigning" / name, f"// explicit {name}\n")
        _write(components / "seamlessSigning" / name, f"// seamless {name}\n")
    return root


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """Templates directory holding a tree for every ``TemplateId``."""
    root = tmp_path / "templates"
    for template in TemplateId:
        if template is TemplateId.CLICKER_GAME:
            build_clicker_template(root / template.value)
        else:
            build_plain_template(root / template.value)
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    out = tmp_path / "workspace"
    out.mkdir()
    return out


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def config(templates_dir: Path, output_dir: Path) -> Config:
    """Config pointing at the fixture templates, with telemetry disabled."""
    return Config(
        templates_dir=templates_dir,
        output_dir=output_dir,
        telemetry=TelemetryConfig(enabled=False),
    )


# ---------------------------------------------------------------------------
# Selections
# ---------------------------------------------------------------------------

@pytest.fixture
def make_selections() -> Callable[..., Selections]:
    """Factory building ``Selections`` for a template identifier."""

    def _make(
        template: str | TemplateId = TemplateId.BOILERPLATE,
        project_name: str | None = "demo",
        network: Network = Network.TESTNET,
        framework: Framework | None = None,
        signing_option: str | None = None,
    ) -> Selections:
        try:
            info = TEMPLATES[TemplateId(template)]
        except ValueError:
            info = TemplateInfo(path=str(template), name="Unknown", doc="https://example.com")
        return Selections(
            project_name=project_name,
            template=info,
            network=network,
            framework=framework or info.framework,
            signing_option=signing_option,
        )

    return _make


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_account() -> GeneratedAccount:
    return GeneratedAccount(
        address="0x" + "ab" * 32,
        public_key="0x" + "cd" * 32,
        private_key="ed25519-priv-0x" + "ef" * 32,
    )


@pytest.fixture
def fake_provisioner(sample_account: GeneratedAccount) -> MagicMock:
    provisioner = MagicMock()
    provisioner.create_module_publisher_account = AsyncMock(return_value=sample_account)
    return provisioner


@pytest.fixture
def fake_installer() -> MagicMock:
    installer = MagicMock()
    installer.command = ["npm", "install"]
    installer.install = AsyncMock(return_value=None)
    return installer


@pytest.fixture
def fake_telemetry() -> MagicMock:
    telemetry = MagicMock()
    telemetry.record = AsyncMock(return_value=True)
    return telemetry


@pytest.fixture
def pipeline_kwargs(
    fake_provisioner: MagicMock,
    fake_installer: MagicMock,
    fake_telemetry: MagicMock,
) -> dict[str, Any]:
    """Keyword arguments wiring every fake collaborator into ``ScaffoldPipeline``."""
    return {
        "provisioner": fake_provisioner,
        "installer": fake_installer,
        "telemetry": fake_telemetry,
    }
