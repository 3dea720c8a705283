# SPDX-License-Identifier: MPL-2.0
"""Additive secret sharing and Beaver triplet generation.

Shares of a secret ``s`` are ``n`` residues modulo ``M`` whose sum reduces to
``s mod M``. Any ``n - 1`` of them are uniformly distributed over the units of
``Z_M`` and reveal nothing about ``s``.
"""
from __future__ import annotations

from typing import Iterable, List, NamedTuple

from .arith import get_random, mod_inverse, mod_mul, slot_rng


class BeaverTriplet(NamedTuple):
    """Correlated randomness ``(w, u, v)`` with ``w = u * v mod M``."""

    w: int
    u: int
    v: int

    def is_consistent(self, modulus: int) -> bool:
        return mod_mul(self.u, self.v, modulus) == self.w % modulus


def generate_shares(secret: int, n: int, modulus: int) -> List[int]:
    """Split ``secret`` into ``n`` additive shares modulo ``modulus``.

    One slot, chosen at random, absorbs ``secret - sum(others)`` so the
    position of the balancing share is not fixed.
    """
    if n < 1:
        raise ValueError("at least one share is required")
    if modulus < 1:
        raise ValueError("modulus must be positive")

    shares = [0] * n
    j = slot_rng.randrange(n)
    total = 0
    for i in range(n):
        if i != j:
            shares[i] = get_random(modulus)
            total += shares[i]
    shares[j] = (secret - total) % modulus
    return shares


def reconstruct(shares: Iterable[int], modulus: int) -> int:
    """Return the secret (reduced into ``[0, modulus)``) behind ``shares``."""
    return sum(shares) % modulus


def generate_beaver_triplet(modulus: int) -> BeaverTriplet:
    """Draw a multiplication triplet over ``Z_modulus``.

    Half of the time ``u`` and ``v`` are sampled and ``w`` derived; otherwise
    ``v`` and ``w`` are sampled and ``u`` is solved for through inverses.
    """
    x, y = get_random(modulus), get_random(modulus)

    if slot_rng.randrange(2):
        return BeaverTriplet(w=mod_mul(x, y, modulus), u=x, v=y)

    # u = (x * y^-1)^-1 = y * x^-1
    u = mod_inverse(mod_mul(x, mod_inverse(y, modulus), modulus), modulus)
    return BeaverTriplet(w=y, u=u, v=x)
