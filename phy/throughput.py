# phy/throughput.py
# TBS -> bits per slot -> DL MAC / application throughput
from __future__ import annotations
import math
import re

from .errors import InvalidInputError

DEFAULT_DL_OVERHEAD = 0.18

_RATIO_PAT = re.compile(r"^\s*(\d+)\s*:\s*(\d+)\s*$")


def bits_per_rb(tbs: int, layers: int) -> int:
    return tbs * layers


def total_prbs_available(prb_count: int, overhead: float = DEFAULT_DL_OVERHEAD) -> int:
    """PRBs left after removing the DL control/signalling overhead share."""
    return prb_count - math.ceil(prb_count * overhead)


def bits_per_slot(rb_bits: int, n_prb: int) -> int:
    return rb_bits * n_prb


def dl_fraction(ratio: str) -> float:
    """'DL:UL' TDD split (e.g. '4:1') -> DL share of slots."""
    m = _RATIO_PAT.match(ratio) if isinstance(ratio, str) else None
    if m is None:
        raise InvalidInputError(f"DL:UL ratio must look like '4:1', got {ratio!r}")
    dl, ul = int(m.group(1)), int(m.group(2))
    if dl <= 0 or ul <= 0:
        raise InvalidInputError(f"DL:UL ratio needs two positive integers, got {ratio!r}")
    return dl / (dl + ul)


def mac_throughput_bps(slot_bits: int, dl_frac: float, slot_duration_s: float) -> float:
    if slot_duration_s <= 0:
        raise InvalidInputError(f"slot duration must be > 0 s, got {slot_duration_s}")
    return slot_bits * dl_frac / slot_duration_s


def application_throughput_bps(mac_bps: float, app_packet_bytes: int, mac_packet_bytes: int) -> float:
    """Scale MAC throughput by the application/MAC packet size ratio (header overhead)."""
    if app_packet_bytes <= 0 or mac_packet_bytes <= 0:
        raise InvalidInputError(
            f"packet sizes must be > 0, got app={app_packet_bytes} mac={mac_packet_bytes}")
    return mac_bps * (app_packet_bytes / mac_packet_bytes)
