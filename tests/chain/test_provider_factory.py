"""Tests for create_caller provider resolution and signer selection."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from web3 import HTTPProvider, IPCProvider, Web3

from lendkit.chain.provider_factory import _provider_from_url, create_caller
from lendkit.chain.web3_caller import Web3Caller

# Well-known throwaway key (never funded)
TEST_KEY = "0x" + "11" * 32


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("ETH_RPC_URL", raising=False)
    monkeypatch.delenv("ETH_PRIVATE_KEY", raising=False)


class TestProviderFromUrl:
    def test_http(self) -> None:
        provider = _provider_from_url("http://localhost:8545")
        assert isinstance(provider, HTTPProvider)
        assert provider.endpoint_uri == "http://localhost:8545"

    def test_https(self) -> None:
        assert isinstance(_provider_from_url("https://rpc.example.org"), HTTPProvider)

    def test_ipc(self) -> None:
        assert isinstance(_provider_from_url("/tmp/geth.ipc"), IPCProvider)

    def test_unsupported(self) -> None:
        with pytest.raises(ValueError, match="Unsupported provider URL"):
            _provider_from_url("ws://localhost:8546")


class TestCreateCaller:
    def test_returns_web3_caller(self) -> None:
        caller = create_caller("http://localhost:8545")
        assert isinstance(caller, Web3Caller)
        assert caller.signer is None

    def test_existing_web3_is_reused(self) -> None:
        w3 = MagicMock(spec=Web3)
        w3.eth = MagicMock()
        caller = create_caller(w3)
        assert caller._w3 is w3

    def test_provider_object_is_wrapped(self) -> None:
        provider = HTTPProvider("http://localhost:8545")
        caller = create_caller(provider)
        assert caller._w3.provider is provider

    def test_network_name_uses_env_url(self, monkeypatch) -> None:
        monkeypatch.setenv("ETH_RPC_URL", "http://node.internal:8545")
        caller = create_caller("mainnet")
        assert caller._w3.provider.endpoint_uri == "http://node.internal:8545"

    def test_default_uses_env_url(self, monkeypatch) -> None:
        monkeypatch.setenv("ETH_RPC_URL", "http://node.internal:8545")
        assert isinstance(create_caller(), Web3Caller)

    def test_network_name_without_env(self) -> None:
        with pytest.raises(ValueError, match="ETH_RPC_URL"):
            create_caller("mainnet")

    def test_no_provider_without_env(self) -> None:
        with pytest.raises(ValueError, match="ETH_RPC_URL"):
            create_caller()

    def test_bad_provider_type(self) -> None:
        with pytest.raises(TypeError, match="Argument `provider`"):
            create_caller(8545)


class TestSigner:
    def test_explicit_key(self) -> None:
        caller = create_caller("http://localhost:8545", private_key=TEST_KEY)
        expected = Web3().eth.account.from_key(TEST_KEY).address
        assert caller.signer == expected

    def test_key_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("ETH_PRIVATE_KEY", TEST_KEY)
        caller = create_caller("http://localhost:8545")
        assert caller.signer is not None

    def test_explicit_key_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("ETH_PRIVATE_KEY", "0x" + "22" * 32)
        caller = create_caller("http://localhost:8545", private_key=TEST_KEY)
        assert caller.signer == Web3().eth.account.from_key(TEST_KEY).address
