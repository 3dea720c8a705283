import pytest

from commodity_mpc.params import Parameters
from commodity_mpc.sharing import generate_beaver_triplet


@pytest.fixture
def small_params():
    """Two parties over Z_101, enough for hand-checked arithmetic."""
    return Parameters(party_count=2, modulus=101, triplet=generate_beaver_triplet(101))
