# SPDX-License-Identifier: MPL-2.0
"""Protocol parameters for the commodity-based model."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .arith import generate_prime, slot_rng
from .errors import ConfigError
from .sharing import BeaverTriplet, generate_beaver_triplet


class Parameters(BaseModel):
    """Immutable configuration shared by the orchestrator and every party.

    Construction performs no protocol checks; :meth:`validate_for_protocol`
    is run by ``setup``.
    """

    model_config = ConfigDict(frozen=True)

    party_count: int = Field(..., description="Number of computing parties")
    modulus: int = Field(..., description="Modulus of the ring all shares live in")
    triplet: BeaverTriplet = Field(..., description="Dealer-supplied multiplication triplet")
    async_marker: int = Field(
        0, description="Party that takes the alternate role in multiplication setups"
    )

    @classmethod
    def generate(cls, bit_length: int, party_count: int = 2) -> "Parameters":
        """Build parameters around a fresh ``bit_length``-bit prime modulus."""
        modulus = generate_prime(bit_length)
        return cls(
            party_count=party_count,
            modulus=modulus,
            triplet=generate_beaver_triplet(modulus),
            async_marker=slot_rng.randrange(max(party_count, 1)),
        )

    def validate_for_protocol(self) -> None:
        if self.party_count < 2:
            raise ConfigError("The number of computing parties must be equal to or greater than 2")
        if self.modulus < 2:
            raise ConfigError("The modulus must be greater than 1")
        if not 0 <= self.async_marker < self.party_count:
            raise ConfigError(
                f"async_marker {self.async_marker} is not a party id in [0, {self.party_count})"
            )


class ProtocolLimits(BaseModel):
    """Runtime bounds applied by the orchestrator."""

    timeout_seconds: float = Field(
        30.0, gt=0, description="Maximum time to wait for every party to reply"
    )
