"""Platform, caller and network bound together for protocol operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from lendkit.data.interfaces import ContractCaller
from lendkit.data.platforms import Platform

logger = logging.getLogger(__name__)


@dataclass
class ProtocolContext:
    """Everything an operation needs to resolve names and dispatch calls.

    The network is detected from the caller on first use unless given.
    """

    platform: Platform
    caller: ContractCaller
    network: str | None = None

    def network_name(self) -> str:
        if self.network is None:
            self.network = self.caller.network_name()
            logger.debug("Detected network %s for platform %s", self.network, self.platform.name)
        return self.network

    def addresses(self) -> Mapping[str, str]:
        return self.platform.addresses_for(self.network_name())

    def address_of(self, name: str) -> str | None:
        return self.addresses().get(name)

    def decimals_of(self, name: str) -> int | None:
        return self.platform.decimals.get(name)
