"""
Filter Coefficients - Fixed-point w0 and 1/Q terms for the integration loop

w0 is stored as 2*pi*f*1.048576 so the consumer can divide by 1 000 000 by
right-shifting 20 times (2^20 = 1048576). The Q term is stored as 1024/Q and
dispensed of later by right-shifting 10 times.
"""

import math

import numpy as np

W0_SCALE = 2.0 * math.pi * 1.048576
W0_SHIFT = 20

Q_SHIFT = 10
Q_MIN = 0.707
RES_MAX = 0x0f


def compute_w0(lookup: np.ndarray, fc: int) -> int:
    """Direct table lookup of the w0 coefficient for an 11-bit FC code."""
    return int(lookup[fc & 0x7ff])


def compute_1024_div_q(res: int) -> int:
    """
    Resonance term for a 4-bit RES code.

    Q is controlled linearly by res with approximate range [0.707, 1.7].
    As resonance increases, the filter must be clocked more often to keep
    stable.
    """
    q = Q_MIN + 1.0 * (res & RES_MAX) / RES_MAX
    return int(round((1 << Q_SHIFT) / q))


# Every RES code has its term precomputed; res writes index this table.
Q_TABLE = tuple(compute_1024_div_q(res) for res in range(RES_MAX + 1))
