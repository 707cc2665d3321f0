"""Module publisher account provisioning.

Generates a fresh Ed25519 keypair for the new project, derives its Aptos
account address and, on networks that have a public faucet enabled in the
configuration, funds it so the project's Move modules can be published
right away.

Typical usage::

    provisioner = AccountProvisioner(config.faucet)
    account = await provisioner.create_module_publisher_account(selections)
    print(account.address)
"""

from __future__ import annotations

import hashlib

import httpx
from nacl.signing import SigningKey

from create_dapp.config import FaucetConfig
from create_dapp.errors import AccountCreationError
from create_dapp.models import GeneratedAccount, Network, Selections

# Authentication key scheme byte for single-signer Ed25519 accounts.
ED25519_SCHEME = b"\x00"

AIP80_ED25519_PREFIX = "ed25519-priv-"


def derive_address(public_key: bytes) -> str:
    """Derive the account address of a single-signer Ed25519 public key."""
    digest = hashlib.sha3_256(public_key + ED25519_SCHEME).hexdigest()
    return f"0x{digest}"


def generate_account() -> GeneratedAccount:
    """Create a new, unfunded account from a random Ed25519 key."""
    signing_key = SigningKey.generate()
    public_key = bytes(signing_key.verify_key)
    return GeneratedAccount(
        address=derive_address(public_key),
        public_key=f"0x{public_key.hex()}",
        private_key=f"{AIP80_ED25519_PREFIX}0x{bytes(signing_key).hex()}",
    )


class AccountProvisioner:
    """Creates the module publisher account for a scaffold run.

    Funding goes through the faucet ``/mint`` endpoint using
    ``httpx.AsyncClient``.  Networks without a configured faucet get an
    unfunded account.
    """

    def __init__(self, faucet: FaucetConfig | None = None) -> None:
        self.faucet = faucet or FaucetConfig()

    def _client(self, base_url: str) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=httpx.Timeout(self.faucet.timeout, connect=10.0),
        )

    async def create_module_publisher_account(self, selections: Selections) -> GeneratedAccount:
        """Generate an account and fund it when the network allows.

        Raises:
            AccountCreationError: If the faucet rejects or cannot be reached.
        """
        account = generate_account()
        faucet_url = self.faucet.url_for(Network(selections.network))
        if faucet_url is None or self.faucet.fund_amount == 0:
            return account

        await self.fund(faucet_url, account.address, self.faucet.fund_amount)
        return account.model_copy(update={"funded": True})

    async def fund(self, faucet_url: str, address: str, amount: int) -> list[str]:
        """Mint *amount* octas to *address*.

        Returns:
            The faucet's transaction hashes.
        """
        try:
            async with self._client(faucet_url) as client:
                response = await client.post(
                    "/mint", params={"amount": amount, "address": address}
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise AccountCreationError(
                f"Faucet at {faucet_url} refused to fund {address}: "
                f"HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise AccountCreationError(
                f"Cannot reach faucet at {faucet_url}: {exc}"
            ) from exc

        if isinstance(data, list):
            return [str(tx) for tx in data]
        return [str(data)]
