# phy/units.py
# Power and wavelength/frequency conversions
from __future__ import annotations
import math

from .errors import InvalidInputError

SPEED_OF_LIGHT = 299792458.0  # m/s


def dbm_to_watts(p_dbm: float) -> float:
    """P_W = 1e-3 * 10^(P_dBm/10)"""
    return 0.001 * 10 ** (p_dbm / 10.0)


def watts_to_dbm(p_w: float) -> float:
    if p_w <= 0:
        raise InvalidInputError(f"power must be > 0 W, got {p_w}")
    return 10.0 * math.log10(p_w / 0.001)


def wavelength_m(frequency_hz: float) -> float:
    if frequency_hz <= 0:
        raise InvalidInputError(f"frequency must be > 0 Hz, got {frequency_hz}")
    return SPEED_OF_LIGHT / frequency_hz


def frequency_from_wavelength_hz(wavelength: float) -> float:
    if wavelength <= 0:
        raise InvalidInputError(f"wavelength must be > 0 m, got {wavelength}")
    return SPEED_OF_LIGHT / wavelength
