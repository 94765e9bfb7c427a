"""Shared fixtures: a recording ContractCaller and a mainnet context."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

import pytest

from lendkit.data.interfaces import ContractCaller
from lendkit.data.platforms import COMPOUND
from lendkit.protocol.context import ProtocolContext


@dataclass
class Call:
    kind: str  # "read" or "transact"
    address: str
    abi: list[dict]
    method: str
    args: list[Any]
    value: int | None = None
    overrides: dict[str, Any] = field(default_factory=dict)


class RecordingCaller(ContractCaller):
    """ContractCaller that records every call and answers reads from a table.

    ``responses`` maps a method name to a value, or to a callable taking
    ``(address, args)`` for reads whose answer depends on the target.
    """

    def __init__(self, network: str = "mainnet") -> None:
        self.network = network
        self.calls: list[Call] = []
        self.responses: dict[str, Any | Callable[[str, list[Any]], Any]] = {}
        self.balances: dict[str, int] = {}
        self.block = 19_000_000
        self.network_lookups = 0

    def network_name(self) -> str:
        self.network_lookups += 1
        return self.network

    def read(self, address: str, abi: list[dict], method: str, args: Sequence[Any] = ()) -> Any:
        self.calls.append(Call("read", address, abi, method, list(args)))
        response = self.responses[method]
        if callable(response):
            return response(address, list(args))
        return response

    def transact(
        self,
        address: str,
        abi: list[dict],
        method: str,
        args: Sequence[Any] = (),
        value: int | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> str:
        self.calls.append(
            Call("transact", address, abi, method, list(args), value, dict(overrides or {}))
        )
        return "0x" + f"{len(self.calls):064x}"

    def get_balance(self, address: str) -> int:
        return self.balances.get(address, 0)

    def block_number(self) -> int:
        return self.block

    def wait_for_receipt(self, tx_hash: str, timeout: float = 120.0) -> Any:
        return {"transactionHash": tx_hash, "status": 1}

    @property
    def transactions(self) -> list[Call]:
        return [c for c in self.calls if c.kind == "transact"]


@pytest.fixture
def caller() -> RecordingCaller:
    return RecordingCaller()


@pytest.fixture
def ctx(caller: RecordingCaller) -> ProtocolContext:
    return ProtocolContext(COMPOUND, caller)


@pytest.fixture
def mainnet() -> dict[str, str]:
    return dict(COMPOUND.addresses["mainnet"])
