# phy/numerology.py
# NR numerology helpers: SCS, slot / symbol durations, subcarrier count, FFT size
from __future__ import annotations
from dataclasses import dataclass

from .errors import InvalidInputError

# mu -> subcarrier spacing (kHz)
NUMEROLOGIES = {
    0: 15,
    1: 30,
    2: 60,
    3: 120,
    4: 240,
}

SUBCARRIERS_PER_RB = 12
SYMBOLS_PER_SLOT = 14  # normal cyclic prefix


@dataclass(frozen=True)
class FrameParams:
    numerology: int
    scs_khz: int
    symbol_duration_us: float
    slot_duration_ms: float
    slots_per_subframe: int
    rb_bandwidth_khz: int


def _check_mu(mu: int) -> int:
    if mu not in NUMEROLOGIES:
        raise InvalidInputError(f"unsupported numerology {mu!r} (expected one of {sorted(NUMEROLOGIES)})")
    return mu


def subcarrier_spacing_khz(mu: int) -> int:
    return NUMEROLOGIES[_check_mu(mu)]


def slot_duration_ms(mu: int) -> float:
    # 1 ms subframe holds 2^mu slots
    return 1.0 / (2 ** _check_mu(mu))


def slot_duration_s(mu: int) -> float:
    return slot_duration_ms(mu) / 1000.0


def slots_per_subframe(mu: int) -> int:
    return 2 ** _check_mu(mu)


def ofdm_symbol_duration_us(scs_hz: float) -> float:
    """Useful OFDM symbol duration (1/SCS), without cyclic prefix."""
    if scs_hz <= 0:
        raise InvalidInputError(f"SCS must be > 0 Hz, got {scs_hz}")
    return 1e6 / scs_hz


def num_subcarriers(bandwidth_hz: float, scs_khz: float) -> int:
    if bandwidth_hz <= 0:
        raise InvalidInputError(f"bandwidth must be > 0 Hz, got {bandwidth_hz}")
    if scs_khz <= 0:
        raise InvalidInputError(f"SCS must be > 0 kHz, got {scs_khz}")
    return int(bandwidth_hz / (scs_khz * 1e3))


def fft_size(symbol_duration_s: float, sampling_hz: float) -> int:
    if symbol_duration_s <= 0:
        raise InvalidInputError(f"symbol duration must be > 0 s, got {symbol_duration_s}")
    if sampling_hz <= 0:
        raise InvalidInputError(f"sampling frequency must be > 0 Hz, got {sampling_hz}")
    return int(symbol_duration_s * sampling_hz)


def describe_frame(mu: int) -> FrameParams:
    scs = subcarrier_spacing_khz(mu)
    return FrameParams(
        numerology=mu,
        scs_khz=scs,
        symbol_duration_us=ofdm_symbol_duration_us(scs * 1e3),
        slot_duration_ms=slot_duration_ms(mu),
        slots_per_subframe=slots_per_subframe(mu),
        rb_bandwidth_khz=SUBCARRIERS_PER_RB * scs,
    )
