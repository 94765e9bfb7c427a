"""Account balances and chain head."""

from __future__ import annotations

from web3 import Web3

from lendkit.data.contracts import ERC20_ABI
from lendkit.protocol.amounts import error_prefix
from lendkit.protocol.context import ProtocolContext


def get_token_balance(ctx: ProtocolContext, address: str, asset: str) -> str:
    """Balance of *asset* held by *address*, in base units.

    The native asset reads the account balance; anything else calls
    ``balanceOf`` on the token contract from the address table.
    """
    prefix = error_prefix("getTokenBalance")
    if not isinstance(address, str) or not Web3.is_address(address):
        raise ValueError(prefix + "Argument `address` must be a valid address.")
    owner = Web3.to_checksum_address(address)

    if asset == ctx.platform.native_asset:
        return str(ctx.caller.get_balance(owner))

    token_address = ctx.address_of(asset)
    if not token_address:
        raise ValueError(prefix + f"Argument `asset` is not supported: {asset!r}.")
    return str(ctx.caller.read(token_address, ERC20_ABI, "balanceOf", [owner]))


def get_block_number(ctx: ProtocolContext) -> int:
    return ctx.caller.block_number()
