"""Abstract contract-call interface and shared result types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass(frozen=True)
class MarketAddresses:
    """A cToken market and its underlying token."""

    address: str | None
    underlying_address: str | None  # None for the native currency


@dataclass(frozen=True)
class NamedAddress:
    name: str
    address: str | None


@dataclass(frozen=True)
class PoolAssets:
    """cTokens matched from a list of addresses, with their underlyings."""

    ctokens: list[NamedAddress] = field(default_factory=list)
    underlyings: list[NamedAddress] = field(default_factory=list)


class ContractCaller(ABC):
    """Dispatches contract reads and transactions to a chain."""

    @abstractmethod
    def network_name(self) -> str:
        """Name of the connected network (address table key)."""

    @abstractmethod
    def read(
        self,
        address: str,
        abi: list[dict],
        method: str,
        args: Sequence[Any] = (),
    ) -> Any:
        """Call a contract function without sending a transaction."""

    @abstractmethod
    def transact(
        self,
        address: str,
        abi: list[dict],
        method: str,
        args: Sequence[Any] = (),
        value: int | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> str:
        """Send a transaction and return its hash as a ``0x`` hex string."""

    @abstractmethod
    def get_balance(self, address: str) -> int:
        """Native currency balance of *address* in wei."""

    @abstractmethod
    def block_number(self) -> int:
        """Latest block number."""

    @abstractmethod
    def wait_for_receipt(self, tx_hash: str, timeout: float = 120.0) -> Any:
        """Block until *tx_hash* is mined and return its receipt."""
