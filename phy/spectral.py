# phy/spectral.py
# Shannon spectral efficiency and floor quantization against the CQI / MCS tables
from __future__ import annotations
from typing import Tuple
import logging
import math
import numpy as np

from .errors import InvalidInputError
from .tables import CQI_TABLE, MCS_TABLE, CQI_EFFICIENCY, MCS_EFFICIENCY, CqiEntry, McsEntry

log = logging.getLogger(__name__)


def spectral_efficiency(snr_lin: float) -> float:
    """Shannon bound per layer: log2(1 + SNR) in bits/s/Hz."""
    if not math.isfinite(snr_lin) or snr_lin < 0:
        raise InvalidInputError(f"linear SNR must be finite and >= 0, got {snr_lin}")
    return math.log2(1.0 + snr_lin)


def shannon_capacity_bps(bandwidth_hz: float, snr_lin: float) -> float:
    if bandwidth_hz <= 0:
        raise InvalidInputError(f"bandwidth must be > 0 Hz, got {bandwidth_hz}")
    return bandwidth_hz * spectral_efficiency(snr_lin)


def _floor_index(column: np.ndarray, value: float) -> Tuple[int, bool]:
    """
    Index of the largest entry <= value in an ascending column.
    Values below the first entry map to index 0 and are reported as clamped.
    """
    idx = int(np.searchsorted(column, value, side="right")) - 1
    if idx < 0:
        return 0, True
    return idx, False


def select_cqi(efficiency: float) -> Tuple[CqiEntry, bool]:
    idx, clamped = _floor_index(CQI_EFFICIENCY, efficiency)
    return CQI_TABLE[idx], clamped


def select_mcs(efficiency: float) -> Tuple[McsEntry, bool]:
    idx, clamped = _floor_index(MCS_EFFICIENCY, efficiency)
    if clamped:
        log.warning("efficiency %.4f below MCS table (min %.4f), using MCS 0",
                    efficiency, MCS_EFFICIENCY[0])
    return MCS_TABLE[idx], clamped


def modulation_and_code_rate(efficiency: float) -> Tuple[int, float]:
    """(Qm, R x 1024) for a continuous efficiency, quantized through CQI then MCS."""
    cqi, _ = select_cqi(efficiency)
    mcs, _ = select_mcs(cqi.efficiency)
    return mcs.modulation_order, mcs.code_rate_x1024


def mcs_by_index(mcs_index: int) -> McsEntry:
    if not 0 <= mcs_index < len(MCS_TABLE):
        raise InvalidInputError(f"MCS index must be in [0, {len(MCS_TABLE) - 1}], got {mcs_index}")
    return MCS_TABLE[mcs_index]


def qam_descriptor(order: int) -> Tuple[int, float]:
    """
    Square M-QAM: bits per symbol b = log2(M) and average symbol energy
    sf = 2(M-1)/3 (normalize amplitudes by 1/sqrt(sf)).
    """
    if order < 4 or order & (order - 1) or int(math.log2(order)) % 2:
        raise InvalidInputError(f"square QAM order must be 4^k (4, 16, 64, ...), got {order}")
    return int(math.log2(order)), 2.0 * (order - 1) / 3.0
