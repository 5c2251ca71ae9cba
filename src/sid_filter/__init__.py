"""
SID Filter - MOS6581/MOS8580 filter cutoff calibration and coefficient core
Register decoding and fixed-point w0 / Q terms for a state-variable filter loop
"""

__version__ = "0.1.0"

# Make key components available at package level
from .calibration import CalibrationError, CalibrationPoint, ChipModel
from .chip_model import ChipModelConfig
from .filter import Filter
from .registers import FilterRegisters

__all__ = [
    'CalibrationError', 'CalibrationPoint', 'ChipModel',
    'ChipModelConfig', 'Filter', 'FilterRegisters',
]
