# tests/test_machine.py
"""
Tests for the machine state and its configuration.
"""

import pytest

from maskvm.machine import Machine, SimulationConfig
from maskvm.mask import TRANSPARENT_MASK, parse_mask
from maskvm.passes import PASSES


class TestMachine:

    def test_initial_state(self):
        m = Machine()
        assert m.mask == TRANSPARENT_MASK
        assert m.memory == {}
        assert m.sum_values() == 0
        assert len(m) == 0
        assert isinstance(m.config, SimulationConfig)

    def test_store_and_sum(self):
        m = Machine()
        m.store(1, 10)
        m.store(2 ** 35, 32)
        assert m.sum_values() == 42
        assert len(m) == 2

    def test_overwrite_keeps_latest(self):
        m = Machine()
        m.store(8, 73)
        m.store(8, 64)
        assert m.memory == {8: 64}
        assert m.sum_values() == 64

    def test_sum_does_not_overflow(self):
        m = Machine()
        for address in range(1000):
            m.store(address, 2 ** 64 - 1)
        assert m.sum_values() == 1000 * (2 ** 64 - 1)

    def test_set_mask(self):
        m = Machine()
        mask = parse_mask("0" * 36)
        m.set_mask(mask)
        assert m.mask is mask

    def test_machines_are_independent(self):
        a, b = Machine(), Machine()
        a.store(1, 1)
        assert b.memory == {}


class TestSimulationConfig:

    def test_defaults_valid(self):
        cfg = SimulationConfig()
        assert cfg.max_floating_bits == 36
        assert cfg.parts == (1, 2)
        assert cfg.validate() == []

    @pytest.mark.parametrize("bits", [-1, 37])
    def test_floating_bits_range(self, bits):
        problems = SimulationConfig(max_floating_bits=bits).validate()
        assert len(problems) == 1
        assert "max_floating_bits" in problems[0]

    def test_no_parts(self):
        assert SimulationConfig(parts=()).validate() == ["at least one part must be selected"]

    def test_unknown_part(self):
        cfg = SimulationConfig(parts=(1, 3))
        assert cfg.validate(known_parts=(1, 2)) == ["unknown part 3"]

    def test_parts_unchecked_without_known_parts(self):
        assert SimulationConfig(parts=(1, 3)).validate() == []

    def test_known_parts_from_registry(self):
        assert SimulationConfig(parts=(2,)).validate(known_parts=PASSES) == []
        assert SimulationConfig(parts=(4,)).validate(known_parts=PASSES) == ["unknown part 4"]
