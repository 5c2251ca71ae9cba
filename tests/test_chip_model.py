"""
Test chip model selection and dense FC lookup generation
"""

import numpy as np
import pytest

from sid_filter.calibration import F0_6581, F0_8580, CalibrationError, ChipModel
from sid_filter.chip_model import VOICE_DC_6581, ChipModelConfig
from sid_filter.coefficients import W0_SCALE


def scaled(freq):
    return int(round(freq * W0_SCALE))


class TestChipModelConfig:
    """Variant selection and lookup contents"""

    def setup_method(self):
        self.chip = ChipModelConfig()

    def test_default_is_6581(self):
        assert self.chip.model is ChipModel.MOS6581
        assert self.chip.voice_dc == VOICE_DC_6581 == -261056
        assert self.chip.fc_default() is F0_6581

    def test_table_shapes(self):
        assert self.chip.f0.shape == (2048,)
        assert self.chip.w0_table.shape == (2048,)
        assert self.chip.w0_table.dtype == np.int32

    def test_6581_reproduces_calibration_points(self):
        for fc, freq in F0_6581:
            assert self.chip.w0_table[fc] == scaled(freq)
            assert self.chip.f0[fc] == pytest.approx(freq)

    def test_6581_endpoint_values(self):
        # 2*pi*1.048576 * 220 = 1449.45, * 18000 = 118591.15
        assert self.chip.w0_table[0] == 1449
        assert self.chip.w0_table[2047] == 118591

    def test_6581_discontinuity(self):
        """The curve drops at 1023 -> 1024 instead of being smoothed"""
        f0 = self.chip.f0
        assert f0[1023] == pytest.approx(6000)
        assert f0[1024] == pytest.approx(4600)
        assert f0[1022] > 5900
        assert f0[1025] < 4700
        # Jump is far larger than neighbouring steps on either side
        jump = f0[1023] - f0[1024]
        assert jump > 10 * abs(f0[1023] - f0[1022])
        assert jump > 10 * abs(f0[1025] - f0[1024])

    def test_select_8580(self):
        self.chip.select_variant(ChipModel.MOS8580)
        assert self.chip.model is ChipModel.MOS8580
        assert self.chip.voice_dc == 0
        assert self.chip.fc_default() is F0_8580
        for fc, freq in F0_8580:
            assert self.chip.w0_table[fc] == scaled(freq)
        assert self.chip.w0_table[0] == 0

    def test_select_by_name(self):
        chip = ChipModelConfig("8580")
        assert chip.model is ChipModel.MOS8580

    def test_lookup_idempotent(self):
        first = self.chip.w0_table.copy()
        self.chip.select_variant(ChipModel.MOS8580)
        self.chip.select_variant(ChipModel.MOS6581)
        np.testing.assert_array_equal(self.chip.w0_table, first)

    def test_instances_independent(self):
        other = ChipModelConfig(ChipModel.MOS8580)
        assert self.chip.model is ChipModel.MOS6581
        assert self.chip.w0_table[0] != other.w0_table[0]

    def test_cutoff_hz(self):
        assert self.chip.cutoff_hz(2047) == pytest.approx(18000)
        assert self.chip.cutoff_hz(0x800) == pytest.approx(220)

    def test_unknown_model_keeps_tables(self):
        before = self.chip.w0_table.copy()
        with pytest.raises(CalibrationError):
            self.chip.select_variant("1234")
        assert self.chip.model is ChipModel.MOS6581
        np.testing.assert_array_equal(self.chip.w0_table, before)


class TestCustomCalibration:
    """Replacement calibration tables"""

    def setup_method(self):
        self.chip = ChipModelConfig(ChipModel.MOS6581)

    def test_linear_calibration(self):
        self.chip.set_calibration([(0, 0), (2047, 2047)])
        np.testing.assert_allclose(self.chip.f0, np.arange(2048))
        assert self.chip.w0_table[1000] == scaled(1000)
        # Model and DC offset untouched
        assert self.chip.model is ChipModel.MOS6581
        assert self.chip.voice_dc == VOICE_DC_6581

    def test_fc_default_returns_custom_points(self):
        self.chip.set_calibration([(0, 100), (1024, 5000), (2047, 9000)])
        assert [tuple(p) for p in self.chip.fc_default()] == [(0, 100), (1024, 5000), (2047, 9000)]

    @pytest.mark.parametrize("points", [
        [(0, 100)],
        [(0, 100), (1500, 300), (1000, 200), (2047, 400)],
        [(0, 100), (2000, 400)],
        [(10, 100), (2047, 400)],
    ])
    def test_rejected_calibration_keeps_old_table(self, points):
        before_w0 = self.chip.w0_table.copy()
        before_points = self.chip.fc_default()
        with pytest.raises(CalibrationError):
            self.chip.set_calibration(points)
        np.testing.assert_array_equal(self.chip.w0_table, before_w0)
        assert self.chip.fc_default() is before_points

    def test_selecting_variant_replaces_custom_table(self):
        self.chip.set_calibration([(0, 0), (2047, 2047)])
        self.chip.select_variant(ChipModel.MOS6581)
        assert self.chip.w0_table[0] == scaled(220)
