# phy/channel.py
# Coherence estimates and area traffic density
from __future__ import annotations

from .errors import InvalidInputError


def coherence_time_s(wavelength_m: float, speed_mps: float) -> float:
    """Tc = lambda / (2 v)"""
    if wavelength_m <= 0:
        raise InvalidInputError(f"wavelength must be > 0 m, got {wavelength_m}")
    if speed_mps <= 0:
        raise InvalidInputError(f"speed must be > 0 m/s, got {speed_mps}")
    return wavelength_m / (2.0 * speed_mps)


def coherence_bandwidth_hz(delay_spread_s: float) -> float:
    """Bc = 1 / tau"""
    if delay_spread_s <= 0:
        raise InvalidInputError(f"delay spread must be > 0 s, got {delay_spread_s}")
    return 1.0 / delay_spread_s


def traffic_density(spectral_efficiency: float, cells_per_km2: float, bandwidth_hz: float) -> float:
    """Area traffic capacity in bits/s/km^2."""
    for name, v in (("spectral efficiency", spectral_efficiency),
                    ("cell density", cells_per_km2),
                    ("bandwidth", bandwidth_hz)):
        if v < 0:
            raise InvalidInputError(f"{name} must be >= 0, got {v}")
    return spectral_efficiency * cells_per_km2 * bandwidth_hz
