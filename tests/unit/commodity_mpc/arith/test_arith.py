# SPDX-License-Identifier: MPL-2.0
"""Tests for modular arithmetic and random sampling."""
import math

import pytest

from commodity_mpc.arith import div_mod, generate_prime, get_random, mod_add, mod_inverse, mod_mul
from commodity_mpc.errors import NotInvertibleError


@pytest.mark.parametrize("n", [2, 45, 6745985156, 2**63 - 1, 2**127 - 1])
def test_get_random_is_a_unit_below_n(n):
    for _ in range(50):
        r = get_random(n)
        assert 0 <= r < n
        assert math.gcd(r, n) == 1


def test_get_random_rejects_non_positive_modulus():
    with pytest.raises(ValueError):
        get_random(0)


def test_modular_helpers():
    assert mod_add(40, 10, 45) == 5
    assert mod_mul(7, 8, 45) == 11
    assert div_mod(18, 5) == (3, 3)
    assert mod_inverse(2, 45) * 2 % 45 == 1


def test_div_mod_by_zero_is_fatal():
    with pytest.raises(ZeroDivisionError):
        div_mod(10, 0)


def test_mod_inverse_of_non_unit():
    with pytest.raises(NotInvertibleError):
        mod_inverse(15, 45)
    # still an ArithmeticError for callers that don't know the package
    with pytest.raises(ArithmeticError):
        mod_inverse(0, 7)


def test_generate_prime_bit_length():
    p = generate_prime(64)
    assert p.bit_length() == 64
    assert pow(2, p - 1, p) == 1

    with pytest.raises(ValueError):
        generate_prime(1)
