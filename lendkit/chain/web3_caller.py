"""On-chain contract caller backed by web3.py."""

from __future__ import annotations

import logging
from typing import Any, Sequence

from web3 import Web3

from lendkit.data.constants import CHAIN_NAMES
from lendkit.data.interfaces import ContractCaller

logger = logging.getLogger(__name__)


class Web3Caller(ContractCaller):
    """Read contracts and send transactions through a ``Web3`` instance.

    Parameters
    ----------
    w3 : Web3
        Connected web3 instance.
    account : LocalAccount | None
        Signing account. When ``None`` transactions are sent from the
        node's default (or first unlocked) account.
    """

    def __init__(self, w3: Any, account: Any | None = None) -> None:
        self._w3 = w3
        self._account = account

        # Contract objects keyed by (checksum address, ABI identity)
        self._contracts: dict[tuple[str, int], Any] = {}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _contract(self, address: str, abi: list[dict]) -> Any:
        checksum = Web3.to_checksum_address(address)
        key = (checksum, id(abi))
        contract = self._contracts.get(key)
        if contract is None:
            contract = self._w3.eth.contract(address=checksum, abi=abi)
            self._contracts[key] = contract
        return contract

    def _sender(self) -> str:
        if self._account is not None:
            return self._account.address
        default = self._w3.eth.default_account
        if Web3.is_address(default):
            return default
        accounts = self._w3.eth.accounts
        if not accounts:
            raise RuntimeError(
                "No signing account: pass a private key or use a node with unlocked accounts"
            )
        return accounts[0]

    def _send_signed(self, tx: dict[str, Any]) -> bytes:
        signed = self._account.sign_transaction(tx)
        # web3 v7 renamed rawTransaction -> raw_transaction
        raw_tx = getattr(signed, "raw_transaction", None) or getattr(signed, "rawTransaction")
        return self._w3.eth.send_raw_transaction(raw_tx)

    # ------------------------------------------------------------------
    # ContractCaller interface
    # ------------------------------------------------------------------

    def network_name(self) -> str:
        chain_id = self._w3.eth.chain_id
        name = CHAIN_NAMES.get(chain_id)
        if name is None:
            logger.warning("Unrecognised chain id %s", chain_id)
            return f"chain-{chain_id}"
        return name

    def read(
        self,
        address: str,
        abi: list[dict],
        method: str,
        args: Sequence[Any] = (),
    ) -> Any:
        fn = getattr(self._contract(address, abi).functions, method)
        return fn(*args).call()

    def transact(
        self,
        address: str,
        abi: list[dict],
        method: str,
        args: Sequence[Any] = (),
        value: int | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> str:
        fn = getattr(self._contract(address, abi).functions, method)(*args)

        params: dict[str, Any] = dict(overrides or {})
        if value is not None:
            params["value"] = value
        # Only look up what the overrides leave out
        if "from" not in params:
            params["from"] = self._sender()

        if self._account is not None:
            if "nonce" not in params:
                params["nonce"] = self._w3.eth.get_transaction_count(params["from"], "pending")
            if "chainId" not in params:
                params["chainId"] = self._w3.eth.chain_id
            tx_hash = self._send_signed(fn.build_transaction(params))
        else:
            tx_hash = fn.transact(params)

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info("Sent %s to %s: %s", method, address, tx_hash_hex)
        return tx_hash_hex

    def get_balance(self, address: str) -> int:
        return self._w3.eth.get_balance(Web3.to_checksum_address(address))

    def block_number(self) -> int:
        return self._w3.eth.block_number

    def wait_for_receipt(self, tx_hash: str, timeout: float = 120.0) -> Any:
        return self._w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout)

    @property
    def is_connected(self) -> bool:
        """Check if the Web3 provider is connected."""
        try:
            return self._w3.is_connected()
        except Exception:
            return False

    @property
    def signer(self) -> str | None:
        return self._account.address if self._account is not None else None
