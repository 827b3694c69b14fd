# phy/resources.py
# Resource-element accounting per RB and per allocation
from __future__ import annotations

from .numerology import SUBCARRIERS_PER_RB, SYMBOLS_PER_SLOT

# a UE may assume at most 156 REs per PRB (TS 38.214 5.1.3.2)
MAX_RES_PER_RB = 156


def res_per_rb(symbols_per_slot: int = SYMBOLS_PER_SLOT,
               dmrs_res: int = 0,
               overhead_res: int = 0,
               subcarriers_per_rb: int = SUBCARRIERS_PER_RB) -> int:
    """Data REs in one RB, capped at MAX_RES_PER_RB. May be <= 0 for invalid inputs."""
    n = subcarriers_per_rb * symbols_per_slot - dmrs_res - overhead_res
    return min(MAX_RES_PER_RB, n)


def total_res(per_rb: int, n_prb: int) -> int:
    return per_rb * n_prb
