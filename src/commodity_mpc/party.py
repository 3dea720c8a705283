# SPDX-License-Identifier: MPL-2.0
"""Computing parties that act on shares without seeing any input."""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .arith import div_mod
from .broadcast import BroadcastAgent
from .params import Parameters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartialResult:
    """A party's reply: its local share sum divided by the parcel count."""
    party_id: int
    quotient: int
    remainder: int


class BaseParty(ABC):
    """A single-use protocol participant."""

    def __init__(
        self,
        party_id: int,
        params: Parameters,
        inbox: asyncio.Queue,
        broadcast_agent: Optional[BroadcastAgent] = None,
    ) -> None:
        self.party_id = party_id
        self.params = params
        self.inbox = inbox
        self.broadcast_agent = broadcast_agent

    @abstractmethod
    async def run(self) -> PartialResult:
        """Wait for input, compute, and return the reply."""


class DistributedIntMeanParty(BaseParty):
    """Sums its column of shares and divides by the number of parcels."""

    async def run(self) -> PartialResult:
        shares: List[int] = list(await self.inbox.get())
        modulus = self.params.modulus

        total = sum(shares) % modulus
        quotient, remainder = div_mod(total, len(shares))

        logger.debug("Party %d computed its partial result", self.party_id)
        return PartialResult(
            party_id=self.party_id,
            quotient=quotient % modulus,
            remainder=remainder % modulus,
        )
