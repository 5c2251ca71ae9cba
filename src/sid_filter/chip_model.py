"""
ChipModelConfig - Per-instance chip variant selection and cutoff lookup

Owns the active calibration table, the voice DC offset and the dense tables
derived from the calibration points. Each Filter holds its own instance, so
several emulated chips with different models can run side by side.

Tables are built into scratch arrays and swapped in only after the whole
build succeeded; a rejected calibration leaves the previous tables in use.
"""

from typing import Optional

import numpy as np

from .calibration import (
    CHIP_TABLES, FC_MAX, FC_MIN,
    CalibrationTable, ChipModel, as_table,
)
from .coefficients import W0_SCALE
from .config import is_verbose
from .spline import interpolate

# The DC offset of one voice is -(5.69V - 5.43V) = -0.26V against a dynamic
# range of |5.29V - 6.34V| = 1.05V, i.e. -1/4 of the range of a voice
# (12-bit waveform times 8-bit envelope). The asymmetric scaling around
# zero that follows from this is not modeled.
VOICE_DC_6581 = -(4095 * 255 // 4)
VOICE_DC_8580 = 0

VOICE_DC = {
    ChipModel.MOS6581: VOICE_DC_6581,
    ChipModel.MOS8580: VOICE_DC_8580,
}

TABLE_SIZE = FC_MAX - FC_MIN + 1


class ChipModelConfig:
    """
    Chip variant configuration and dense FC lookup tables.

    Attributes:
        model: Active ChipModel
        voice_dc: DC offset added to each voice before filtering
        points: Active calibration table
        f0: Cutoff frequency in Hz per FC code (float64)
        w0_table: Fixed-point w0 per FC code (int32, scaled by W0_SCALE)
    """

    def __init__(self, model=ChipModel.MOS6581):
        self.model: Optional[ChipModel] = None
        self.voice_dc = 0
        self.points: CalibrationTable = ()
        self.f0 = np.zeros(TABLE_SIZE, dtype=np.float64)
        self.w0_table = np.zeros(TABLE_SIZE, dtype=np.int32)

        self.select_variant(model)

    def select_variant(self, model) -> None:
        """
        Switch to a chip variant's static table and DC offset.

        Args:
            model: ChipModel or its name ("6581", "MOS8580", 8580, ...)

        Raises:
            CalibrationError: If the model is unknown
        """
        model = ChipModel.parse(model)
        self._rebuild(CHIP_TABLES[model])

        self.model = model
        self.voice_dc = VOICE_DC[model]

        if is_verbose():
            print(f"[ChipModel] Selected MOS{model.value} "
                  f"(voice_dc={self.voice_dc}, {len(self.points)} points)")

    def set_calibration(self, points) -> None:
        """
        Replace the calibration table and rebuild the lookups from it.

        The chip model and DC offset are left as they are. The x range of the
        points must be exactly [0, 2047].

        Raises:
            CalibrationError: If the points are rejected; tables are unchanged
        """
        table = as_table(points)
        try:
            self._rebuild(table)
        except ValueError as e:
            if is_verbose():
                print(f"[ChipModel] Rejected calibration: {e}")
            raise

        if is_verbose():
            print(f"[ChipModel] Loaded custom calibration ({len(table)} points)")

    def fc_default(self) -> CalibrationTable:
        """Return the calibration points the current lookup was built from."""
        return self.points

    def cutoff_hz(self, fc: int) -> float:
        """Interpolated cutoff frequency in Hz for an FC code."""
        return float(self.f0[fc & 0x7ff])

    def _rebuild(self, table: CalibrationTable) -> None:
        f0 = np.empty(TABLE_SIZE, dtype=np.float64)
        w0_table = np.empty(TABLE_SIZE, dtype=np.int32)

        interpolate(table, f0, 1.0, FC_MIN)
        interpolate(table, w0_table, W0_SCALE, FC_MIN)

        self.points = table
        self.f0 = f0
        self.w0_table = w0_table
