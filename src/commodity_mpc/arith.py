# SPDX-License-Identifier: MPL-2.0
"""Modular arithmetic and random sampling over ``Z_n``."""
from __future__ import annotations

import math
import random
import secrets
from typing import Tuple

from Crypto.Util.number import getPrime

from .errors import NotInvertibleError

# Only used to pick array positions and construction branches, never values.
slot_rng = random.Random()


def get_random(n: int) -> int:
    """Return a uniform ``r`` in ``[0, n)`` with ``gcd(r, n) == 1``.

    Samples are drawn from the operating system CSPRNG and rejected until
    one is coprime with ``n``.
    """
    if n < 1:
        raise ValueError("modulus must be positive")
    while True:
        r = secrets.randbelow(n)
        if math.gcd(r, n) == 1:
            return r


def mod_add(a: int, b: int, m: int) -> int:
    return (a + b) % m


def mod_mul(a: int, b: int, m: int) -> int:
    return (a * b) % m


def div_mod(a: int, b: int) -> Tuple[int, int]:
    """Floor division with remainder. ``b == 0`` raises ``ZeroDivisionError``."""
    return divmod(a, b)


def mod_inverse(a: int, m: int) -> int:
    try:
        return pow(a, -1, m)
    except ValueError as exc:
        raise NotInvertibleError(f"{a} has no inverse modulo {m}") from exc


def generate_prime(bit_length: int) -> int:
    """Return a random prime of exactly ``bit_length`` bits."""
    if bit_length < 2:
        raise ValueError("bit_length must be at least 2")
    return getPrime(bit_length)
