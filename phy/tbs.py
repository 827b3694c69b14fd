# phy/tbs.py
# Information bits and Transport Block Size determination (TS 38.214 5.1.3.2)
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import logging
import math
import numpy as np

from .errors import UndefinedOperationError
from .resources import res_per_rb, total_res
from .spectral import mcs_by_index
from .tables import TBS_VALUES, TBS_THRESHOLD_BITS

log = logging.getLogger(__name__)

# max LDPC code block size (bits, incl. CRC) for base graph 2 / base graph 1
CB_SIZE_LOW_RATE = 3816
CB_SIZE_HIGH_RATE = 8424
LOW_RATE_THRESHOLD = 0.25
TB_CRC_BITS = 24


@dataclass(frozen=True)
class TbsDecision:
    ninfo: float
    n: int                 # quantization exponent
    ninfo_prime: int
    tbs: int
    code_blocks: int = 1
    clamped: bool = False  # table lookup fell back to the largest entry


def information_bits(n_re: int, code_rate_x1024: float, modulation_order: int) -> float:
    """Ninfo = N_RE * R * Qm (not yet a legal TBS)."""
    return n_re * (code_rate_x1024 / 1024.0) * modulation_order


def information_bits_per_slot(n_prb: int, mcs_index: int, symbols: int,
                              dmrs_res: int = 0, overhead_res: int = 0) -> float:
    """Ninfo for an allocation of n_prb RBs at a given MCS index."""
    mcs = mcs_by_index(mcs_index)
    n_re = total_res(res_per_rb(symbols, dmrs_res, overhead_res), n_prb)
    return information_bits(n_re, mcs.code_rate_x1024, mcs.modulation_order)


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def quantize_ninfo(ninfo: float) -> Tuple[int, int]:
    """
    Returns (n, Ninfo').
      Ninfo <= 3824: n = max(3, floor(log2 Ninfo) - 6),  Ninfo' = max(24, 2^n floor(Ninfo / 2^n))
      Ninfo  > 3824: n = floor(log2(Ninfo - 24)) - 5,    Ninfo' = 2^n round((Ninfo - 24) / 2^n)
    """
    if not ninfo > 0:
        raise UndefinedOperationError(f"Ninfo must be > 0 to quantize, got {ninfo}")
    if ninfo <= TBS_THRESHOLD_BITS:
        n = max(3, math.floor(math.log2(ninfo)) - 6)
        step = 2 ** n
        return n, max(24, step * math.floor(ninfo / step))
    n = math.floor(math.log2(ninfo - TB_CRC_BITS)) - 5
    step = 2 ** n
    return n, step * _round_half_up((ninfo - TB_CRC_BITS) / step)


def tbs_from_table(ninfo_prime: int) -> Tuple[int, bool]:
    """Smallest tabulated TBS >= Ninfo'. Above the table the largest entry is returned, flagged as clamped."""
    idx = int(np.searchsorted(TBS_VALUES, ninfo_prime, side="left"))
    if idx >= len(TBS_VALUES):
        log.warning("Ninfo'=%d exceeds the TBS table, clamping to %d", ninfo_prime, TBS_VALUES[-1])
        return int(TBS_VALUES[-1]), True
    return int(TBS_VALUES[idx]), False


def tbs_from_formula(ninfo_prime: int, code_rate_x1024: float) -> Tuple[int, int]:
    """Closed-form TBS for Ninfo' > 3824. Returns (TBS, number of code blocks C)."""
    nb = ninfo_prime + TB_CRC_BITS
    if code_rate_x1024 / 1024.0 <= LOW_RATE_THRESHOLD:
        c = _ceil_div(nb, CB_SIZE_LOW_RATE)
    elif ninfo_prime >= CB_SIZE_HIGH_RATE:
        c = _ceil_div(nb, CB_SIZE_HIGH_RATE)
    else:
        return 8 * _ceil_div(nb, 8) - TB_CRC_BITS, 1
    return 8 * c * _ceil_div(nb, 8 * c) - TB_CRC_BITS, c


def determine_tbs(ninfo: float, code_rate_x1024: float) -> TbsDecision:
    n, ninfo_prime = quantize_ninfo(ninfo)
    if ninfo_prime <= TBS_THRESHOLD_BITS:
        tbs, clamped = tbs_from_table(ninfo_prime)
        c = 1
    else:
        tbs, c = tbs_from_formula(ninfo_prime, code_rate_x1024)
        clamped = False
    log.debug("TBS: Ninfo=%.2f n=%d Ninfo'=%d -> TBS=%d (C=%d)", ninfo, n, ninfo_prime, tbs, c)
    return TbsDecision(ninfo=ninfo, n=n, ninfo_prime=ninfo_prime, tbs=tbs, code_blocks=c, clamped=clamped)
