"""create-dapp -- scaffold Aptos dapps from bundled templates."""

__version__ = "0.1.0"
