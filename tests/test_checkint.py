import random

import pytest
from edkey.checkint import FixedCheckint, RandomCheckint, random_checkint, resolve_source


class TestCheckint:

    def test_random_checkint_fits_32_bits(self):
        for _ in range(100):
            assert 0 <= random_checkint() <= 0xFFFFFFFF

    def test_random_checkint_uses_injected_rng(self):
        assert random_checkint(random.Random(1234)) == random.Random(1234).getrandbits(32)

    def test_random_source_draws_once_per_call(self):
        source = RandomCheckint(random.Random(99))
        expected = random.Random(99)
        assert [source() for _ in range(3)] == [expected.getrandbits(32) for _ in range(3)]

    def test_fixed_checkint(self):
        source = FixedCheckint(0xDEADBEEF)
        assert source() == 0xDEADBEEF
        assert source() == 0xDEADBEEF

    def test_fixed_checkint_out_of_range(self):
        with pytest.raises(ValueError, match="32 bits"):
            FixedCheckint(2**32)
        with pytest.raises(ValueError, match="32 bits"):
            FixedCheckint(-1)

    def test_resolve_source(self):
        fixed = FixedCheckint(5)
        assert resolve_source(fixed) is fixed
        assert isinstance(resolve_source(None), RandomCheckint)
