"""
Calibration Tables - Measured FC register to cutoff frequency mappings

Measurements indicate a cutoff range of approximately 220Hz - 18kHz on a
MOS6581 fitted with 470pF capacitors, with a tanh-shaped curve. The MOS8580
follows the linear 30Hz - 12kHz mapping from its datasheet almost exactly.

The curves were measured by feeding the chip an external signal and reading
the bandpass output at full resonance. Cutoff characteristics vary between
machines; these two tables model two particular Commodore 64s.
"""

from enum import Enum
from typing import Dict, List, NamedTuple, Sequence, Tuple

FC_MIN = 0
FC_MAX = 2047


class CalibrationError(ValueError):
    """Raised when a calibration table cannot be used to build a lookup."""


class ChipModel(Enum):
    """Supported chip variants"""
    MOS6581 = "6581"
    MOS8580 = "8580"

    @classmethod
    def parse(cls, value) -> 'ChipModel':
        """
        Accept a ChipModel, its value string or a bare number (6581/8580).

        Raises:
            CalibrationError: If the value names no supported chip
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        if text.startswith("MOS"):
            text = text[3:]
        for model in cls:
            if model.value == text:
                return model
        raise CalibrationError(f"Unknown chip model: {value!r}")


class CalibrationPoint(NamedTuple):
    """One measured (FC register code, cutoff frequency in Hz) pair."""
    fc: int
    freq: int


CalibrationTable = Tuple[CalibrationPoint, ...]


def _table(pairs: Sequence[Tuple[int, int]]) -> CalibrationTable:
    return tuple(CalibrationPoint(fc, freq) for fc, freq in pairs)


# The repeated points at 1023 and 1024 mark a vertical jump where FC bit 10
# flips; the curve must not be smoothed across it.
F0_6581: CalibrationTable = _table([
    #  FC      f         FCHI FCLO
    (    0,   220),   # 0x00
    (  128,   230),   # 0x10
    (  256,   250),   # 0x20
    (  384,   300),   # 0x30
    (  512,   420),   # 0x40
    (  640,   780),   # 0x50
    (  768,  1600),   # 0x60
    (  832,  2300),   # 0x68
    (  896,  3200),   # 0x70
    (  960,  4300),   # 0x78
    (  992,  5000),   # 0x7c
    ( 1008,  5400),   # 0x7e
    ( 1016,  5700),   # 0x7f
    ( 1023,  6000),   # 0x7f 0x07
    ( 1023,  6000),   # 0x7f 0x07
    ( 1024,  4600),   # 0x80
    ( 1024,  4600),   # 0x80
    ( 1032,  4800),   # 0x81
    ( 1056,  5300),   # 0x84
    ( 1088,  6000),   # 0x88
    ( 1120,  6600),   # 0x8c
    ( 1152,  7200),   # 0x90
    ( 1280,  9500),   # 0xa0
    ( 1408, 12000),   # 0xb0
    ( 1536, 14500),   # 0xc0
    ( 1664, 16000),   # 0xd0
    ( 1792, 17100),   # 0xe0
    ( 1920, 17700),   # 0xf0
    ( 2047, 18000),   # 0xff 0x07
])

F0_8580: CalibrationTable = _table([
    #  FC      f         FCHI FCLO
    (    0,     0),   # 0x00
    (  128,   800),   # 0x10
    (  256,  1600),   # 0x20
    (  384,  2500),   # 0x30
    (  512,  3300),   # 0x40
    (  640,  4100),   # 0x50
    (  768,  4800),   # 0x60
    (  896,  5600),   # 0x70
    ( 1024,  6500),   # 0x80
    ( 1152,  7500),   # 0x90
    ( 1280,  8400),   # 0xa0
    ( 1408,  9200),   # 0xb0
    ( 1536,  9800),   # 0xc0
    ( 1664, 10500),   # 0xd0
    ( 1792, 11000),   # 0xe0
    ( 1920, 11700),   # 0xf0
    ( 2047, 12500),   # 0xff 0x07
])

CHIP_TABLES: Dict[ChipModel, CalibrationTable] = {
    ChipModel.MOS6581: F0_6581,
    ChipModel.MOS8580: F0_8580,
}


def as_table(points) -> CalibrationTable:
    """
    Convert any sequence of (fc, freq) pairs into a CalibrationTable.

    Args:
        points: Iterable of CalibrationPoint or 2-tuples

    Returns:
        Immutable tuple of CalibrationPoint
    """
    table: List[CalibrationPoint] = []
    for point in points:
        try:
            fc, freq = point
        except (TypeError, ValueError):
            raise CalibrationError(f"Calibration point must be an (fc, freq) pair, got {point!r}")
        table.append(CalibrationPoint(int(fc), freq))
    return tuple(table)


def validate_points(points: Sequence[CalibrationPoint],
                    x_min: int = FC_MIN, x_max: int = FC_MAX) -> None:
    """
    Check that a point sequence can drive the interpolator over [x_min, x_max].

    Raises:
        CalibrationError: On fewer than 2 points, unsorted x values, or an
            x domain that does not start at x_min and end at x_max
    """
    if len(points) < 2:
        raise CalibrationError(f"Need at least 2 calibration points, got {len(points)}")

    for prev, point in zip(points, points[1:]):
        if point[0] < prev[0]:
            raise CalibrationError(
                f"Calibration points not sorted: fc {point[0]} follows fc {prev[0]}")

    if points[0][0] != x_min or points[-1][0] != x_max:
        raise CalibrationError(
            f"Calibration x range [{points[0][0]}, {points[-1][0]}] "
            f"must be exactly [{x_min}, {x_max}]")