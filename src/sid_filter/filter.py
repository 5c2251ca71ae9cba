"""
Filter - SID state-variable filter register and coefficient core

Decodes filter register writes and keeps the fixed-point coefficients the
per-sample filter loop consumes up to date:
- w0: angular cutoff, 2*pi*f*1.048576, consumed with >> 20
- _1024_div_Q: 1024/Q, consumed with >> 10

Register writes and coefficient reads are O(1). Only chip model selection
and calibration changes rebuild the FC lookup. No internal locking; callers
that write registers from another thread must serialize externally.
"""

from typing import Any, Dict, Optional

from .chip_model import ChipModelConfig
from .coefficients import Q_TABLE, compute_w0
from .config import get_config
from .registers import (
    REG_FC_HI, REG_FC_LO, REG_MODE_VOL, REG_RES_FILT,
    FilterRegisters,
)


class Filter:
    """
    SID filter register file with derived coefficients.

    Args:
        chip_model: ChipModel or name; defaults to SIDFILTER_CHIP_MODEL
        enabled: Initial filter enable; defaults to SIDFILTER_FILTER_ENABLED
    """

    def __init__(self, chip_model=None, enabled: Optional[bool] = None):
        config = get_config()
        if chip_model is None:
            chip_model = config['chip_model']
        if enabled is None:
            enabled = config['filter_enabled']

        self.registers = FilterRegisters()
        self.chip = ChipModelConfig(chip_model)

        self.w0 = 0
        self._1024_div_Q = 0

        self.enable_filter(enabled)
        self.reset()

    # Configuration

    def enable_filter(self, enable: bool) -> None:
        """Toggle whether the filter loop should filter or bypass."""
        self.enabled = bool(enable)

    def set_chip_model(self, model) -> None:
        """Select chip variant; register values are kept, w0 is refreshed."""
        self.chip.select_variant(model)
        self.set_w0()

    def set_calibration(self, points) -> None:
        """Rebuild the FC mapping from custom calibration points covering [0, 2047]."""
        self.chip.set_calibration(points)
        self.set_w0()

    def fc_default(self):
        """Calibration points behind the current FC mapping"""
        return self.chip.fc_default()

    # SID reset

    def reset(self) -> None:
        """Zero registers and filter state, then recompute both coefficients."""
        self.registers.reset()

        # State of filter
        self.Vhp = 0
        self.Vbp = 0
        self.Vlp = 0
        self.Vnf = 0

        self.set_w0()
        self.set_Q()

    # Register functions

    def writeFC_LO(self, fc_lo: int) -> None:
        self.registers.write(REG_FC_LO, fc_lo)
        self.set_w0()

    def writeFC_HI(self, fc_hi: int) -> None:
        self.registers.write(REG_FC_HI, fc_hi)
        self.set_w0()

    def writeRES_FILT(self, res_filt: int) -> None:
        self.registers.write(REG_RES_FILT, res_filt)
        self.set_Q()

    def writeMODE_VOL(self, mode_vol: int) -> None:
        self.registers.write(REG_MODE_VOL, mode_vol)

    def write(self, offset: int, value: int) -> None:
        """
        Dispatch a write by register offset (0x15-0x18).

        Raises:
            ValueError: If offset is not a filter register
        """
        try:
            handler = self._writers[offset]
        except KeyError:
            raise ValueError(f"Not a filter register: 0x{offset:02x}")
        handler(self, value)

    _writers = {
        REG_FC_LO: writeFC_LO,
        REG_FC_HI: writeFC_HI,
        REG_RES_FILT: writeRES_FILT,
        REG_MODE_VOL: writeMODE_VOL,
    }

    # Coefficients

    def set_w0(self) -> None:
        """Set filter cutoff frequency from fc."""
        self.w0 = compute_w0(self.chip.w0_table, self.registers.fc)

    def set_Q(self) -> None:
        """Set filter resonance from res."""
        self._1024_div_Q = Q_TABLE[self.registers.res]

    # Read-only outputs for the filter / mixer loop

    @property
    def q_term(self) -> int:
        return self._1024_div_Q

    @property
    def voice_dc(self) -> int:
        return self.chip.voice_dc

    @property
    def chip_model(self):
        return self.chip.model

    @property
    def fc(self) -> int:
        return self.registers.fc

    @property
    def res(self) -> int:
        return self.registers.res

    @property
    def filtex(self) -> int:
        return self.registers.filtex

    @property
    def filt3_filt2_filt1(self) -> int:
        return self.registers.filt3_filt2_filt1

    @property
    def voice3off(self) -> int:
        return self.registers.voice3off

    @property
    def hp_bp_lp(self) -> int:
        return self.registers.hp_bp_lp

    @property
    def vol(self) -> int:
        return self.registers.vol

    def cutoff_hz(self) -> float:
        """Current cutoff frequency in Hz."""
        return self.chip.cutoff_hz(self.registers.fc)

    def get_state(self) -> Dict[str, Any]:
        """
        Get current filter state for debugging.

        Returns:
            Dictionary of model, registers, coefficients and integrator state
        """
        return {
            'chip_model': self.chip.model.value,
            'enabled': self.enabled,
            'voice_dc': self.chip.voice_dc,
            'registers': self.registers.as_dict(),
            'coefficients': {
                'w0': self.w0,
                '1024_div_Q': self._1024_div_Q,
                'cutoff_hz': self.cutoff_hz(),
            },
            'state_vars': {
                'Vhp': self.Vhp,
                'Vbp': self.Vbp,
                'Vlp': self.Vlp,
                'Vnf': self.Vnf,
            },
        }

    def __repr__(self) -> str:
        return (f"Filter(MOS{self.chip.model.value}, fc={self.fc}, res={self.res}, "
                f"w0={self.w0}, 1024/Q={self._1024_div_Q})")
