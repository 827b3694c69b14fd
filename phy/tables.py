# phy/tables.py
# Static CQI / MCS / TBS tables (TS 38.214, 256QAM CQI table and MCS table 2, TBS table for Ninfo <= 3824)
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import numpy as np


@dataclass(frozen=True)
class CqiEntry:
    index: int
    modulation: str
    code_rate_x1024: int
    efficiency: float          # bits/s/Hz


@dataclass(frozen=True)
class McsEntry:
    index: int
    modulation_order: int      # Qm
    modulation: str
    code_rate_x1024: float     # R x 1024 (real: 682.5, 916.5)
    max_efficiency: float      # bits/s/Hz


CQI_TABLE: Tuple[CqiEntry, ...] = (
    CqiEntry(0,  "out_of_range", 0,   0.0),
    CqiEntry(1,  "QPSK",         78,  0.1523),
    CqiEntry(2,  "QPSK",         193, 0.3770),
    CqiEntry(3,  "QPSK",         449, 0.8770),
    CqiEntry(4,  "16QAM",        378, 1.4766),
    CqiEntry(5,  "16QAM",        490, 1.9141),
    CqiEntry(6,  "16QAM",        616, 2.4063),
    CqiEntry(7,  "64QAM",        466, 2.7305),
    CqiEntry(8,  "64QAM",        567, 3.3223),
    CqiEntry(9,  "64QAM",        666, 3.9023),
    CqiEntry(10, "64QAM",        772, 4.5234),
    CqiEntry(11, "64QAM",        873, 5.1152),
    CqiEntry(12, "256QAM",       711, 5.5547),
    CqiEntry(13, "256QAM",       797, 6.2266),
    CqiEntry(14, "256QAM",       885, 6.9141),
    CqiEntry(15, "256QAM",       948, 7.4063),
)

MCS_TABLE: Tuple[McsEntry, ...] = (
    McsEntry(0,  2, "QPSK",   120,   0.2344),
    McsEntry(1,  2, "QPSK",   193,   0.3770),
    McsEntry(2,  2, "QPSK",   308,   0.6016),
    McsEntry(3,  2, "QPSK",   449,   0.8770),
    McsEntry(4,  2, "QPSK",   602,   1.1758),
    McsEntry(5,  4, "16QAM",  378,   1.4766),
    McsEntry(6,  4, "16QAM",  434,   1.6953),
    McsEntry(7,  4, "16QAM",  490,   1.9141),
    McsEntry(8,  4, "16QAM",  553,   2.1602),
    McsEntry(9,  4, "16QAM",  616,   2.4063),
    McsEntry(10, 4, "16QAM",  658,   2.5703),
    McsEntry(11, 6, "64QAM",  466,   2.7305),
    McsEntry(12, 6, "64QAM",  517,   3.0293),
    McsEntry(13, 6, "64QAM",  567,   3.3223),
    McsEntry(14, 6, "64QAM",  616,   3.6094),
    McsEntry(15, 6, "64QAM",  666,   3.9023),
    McsEntry(16, 6, "64QAM",  719,   4.2129),
    McsEntry(17, 6, "64QAM",  772,   4.5234),
    McsEntry(18, 6, "64QAM",  822,   4.8164),
    McsEntry(19, 6, "64QAM",  873,   5.1152),
    McsEntry(20, 8, "256QAM", 682.5, 5.3320),
    McsEntry(21, 8, "256QAM", 711,   5.5547),
    McsEntry(22, 8, "256QAM", 754,   5.8906),
    McsEntry(23, 8, "256QAM", 797,   6.2266),
    McsEntry(24, 8, "256QAM", 841,   6.5703),
    McsEntry(25, 8, "256QAM", 885,   6.9141),
    McsEntry(26, 8, "256QAM", 916.5, 7.1602),
    McsEntry(27, 8, "256QAM", 948,   7.4063),
)

TBS_TABLE: Tuple[int, ...] = (
    24, 32, 40, 48, 56, 64, 72, 80, 88, 96, 104, 112, 120, 128, 136, 144, 152, 160, 168, 176,
    184, 192, 208, 224, 240, 256, 272, 288, 304, 320, 336, 352, 368, 384, 408, 432, 456, 480,
    504, 528, 552, 576, 608, 640, 672, 704, 736, 768, 808, 848, 888, 928, 984, 1032, 1064,
    1128, 1160, 1192, 1224, 1256, 1288, 1320, 1352, 1416, 1480, 1544, 1608, 1672, 1736, 1800,
    1864, 1928, 2024, 2088, 2152, 2216, 2280, 2408, 2472, 2536, 2600, 2664, 2728, 2792, 2856,
    2976, 3104, 3240, 3368, 3496, 3624, 3752, 3824,
)

# Ninfo threshold separating the table lookup from the closed-form TBS
TBS_THRESHOLD_BITS = 3824


def _frozen(values, dtype) -> np.ndarray:
    arr = np.asarray(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


# search columns used by the lookups (read-only views of the tables above)
CQI_EFFICIENCY = _frozen([e.efficiency for e in CQI_TABLE], np.float64)
MCS_EFFICIENCY = _frozen([e.max_efficiency for e in MCS_TABLE], np.float64)
TBS_VALUES = _frozen(TBS_TABLE, np.int64)
