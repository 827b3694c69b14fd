# phy/pipeline.py
# End-to-end DL throughput estimate: link budget -> SE -> CQI/MCS -> REs -> TBS -> throughput
from __future__ import annotations
from dataclasses import dataclass, asdict, replace
from typing import Dict, Any, Iterable, List, Tuple
import logging

from .errors import InvalidInputError
from .link_budget import LinkBudgetInputs, LinkBudgetResult, estimate_link_budget
from .numerology import SYMBOLS_PER_SLOT, slot_duration_s
from .resources import res_per_rb, total_res
from .spectral import spectral_efficiency, select_cqi, select_mcs
from .tbs import information_bits, determine_tbs
from .throughput import (DEFAULT_DL_OVERHEAD, bits_per_rb, total_prbs_available, bits_per_slot,
                         dl_fraction, mac_throughput_bps, application_throughput_bps)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RadioConfig:
    prb_count: int                     # PRBs configured at the gNB
    numerology: int = 3
    prb_per_ue: int = 1                # RBs allocated for the TBS computation
    symbols_per_slot: int = SYMBOLS_PER_SLOT
    dmrs_res: int = 0
    overhead_res: int = 0
    dl_ul_ratio: str = "4:1"
    dl_overhead: float = DEFAULT_DL_OVERHEAD
    app_packet_bytes: int = 1460
    mac_packet_bytes: int = 1488


@dataclass(frozen=True)
class PipelineResult:
    link_budget: LinkBudgetResult
    spectral_efficiency: float
    cqi_index: int
    cqi_efficiency: float
    mcs_index: int
    modulation_order: int
    code_rate_x1024: float
    available_res: int
    information_bits: float            # Ninfo
    quantized_information_bits: int    # Ninfo'
    transport_block_size: int
    code_blocks: int
    total_prbs: int
    bits_per_slot: int
    dl_fraction: float
    mac_throughput_bps: float
    application_throughput_bps: float
    warnings: Tuple[str, ...] = ()

    @property
    def code_rate(self) -> float:
        return self.code_rate_x1024 / 1024.0

    def as_dict(self) -> Dict[str, Any]:
        """Flat record for CSV/JSONL logging."""
        d = asdict(self)
        lb = d.pop("link_budget")
        d.update({f"lb_{k}": v for k, v in lb.items()})
        d["warnings"] = ";".join(self.warnings)
        return d


def _check_radio(radio: RadioConfig) -> Tuple[float, float]:
    if radio.prb_count <= 0:
        raise InvalidInputError(f"prb_count must be > 0, got {radio.prb_count}")
    if radio.prb_per_ue <= 0:
        raise InvalidInputError(f"prb_per_ue must be > 0, got {radio.prb_per_ue}")
    if not 0.0 <= radio.dl_overhead < 1.0:
        raise InvalidInputError(f"dl_overhead must be in [0, 1), got {radio.dl_overhead}")
    return slot_duration_s(radio.numerology), dl_fraction(radio.dl_ul_ratio)


def evaluate(link: LinkBudgetInputs, radio: RadioConfig) -> PipelineResult:
    """
    Run the whole chain for one snapshot of inputs.
    Raises a PipelineError subclass on invalid input; table clamps are reported in `warnings`.
    """
    slot_s, dl_frac = _check_radio(radio)
    warnings: List[str] = []

    lb = estimate_link_budget(link)
    se = spectral_efficiency(lb.snr_linear)

    cqi, _ = select_cqi(se)
    mcs, mcs_clamped = select_mcs(cqi.efficiency)
    if mcs_clamped:
        warnings.append("mcs_below_table")
    log.debug("SE=%.4f -> CQI %d (%.4f) -> MCS %d (Qm=%d, R=%.1f/1024)",
              se, cqi.index, cqi.efficiency, mcs.index, mcs.modulation_order, mcs.code_rate_x1024)

    n_re = total_res(res_per_rb(radio.symbols_per_slot, radio.dmrs_res, radio.overhead_res), radio.prb_per_ue)
    if n_re <= 0:
        raise InvalidInputError(f"no data REs left in the allocation (N_RE={n_re})")

    ninfo = information_bits(n_re, mcs.code_rate_x1024, mcs.modulation_order)
    tbs = determine_tbs(ninfo, mcs.code_rate_x1024)
    if tbs.clamped:
        warnings.append("tbs_above_table")

    prbs = total_prbs_available(radio.prb_count, radio.dl_overhead)
    slot_bits = bits_per_slot(bits_per_rb(tbs.tbs, link.layers), prbs)
    mac_bps = mac_throughput_bps(slot_bits, dl_frac, slot_s)
    app_bps = application_throughput_bps(mac_bps, radio.app_packet_bytes, radio.mac_packet_bytes)
    log.debug("TBS=%d x %d layers x %d PRBs = %d bits/slot -> MAC %.3f Mbps, app %.3f Mbps",
              tbs.tbs, link.layers, prbs, slot_bits, mac_bps / 1e6, app_bps / 1e6)

    return PipelineResult(
        link_budget=lb,
        spectral_efficiency=se,
        cqi_index=cqi.index,
        cqi_efficiency=cqi.efficiency,
        mcs_index=mcs.index,
        modulation_order=mcs.modulation_order,
        code_rate_x1024=mcs.code_rate_x1024,
        available_res=n_re,
        information_bits=ninfo,
        quantized_information_bits=tbs.ninfo_prime,
        transport_block_size=tbs.tbs,
        code_blocks=tbs.code_blocks,
        total_prbs=prbs,
        bits_per_slot=slot_bits,
        dl_fraction=dl_frac,
        mac_throughput_bps=mac_bps,
        application_throughput_bps=app_bps,
        warnings=tuple(warnings),
    )


def sweep(link: LinkBudgetInputs, radio: RadioConfig, path_losses_db: Iterable[float]) -> List[PipelineResult]:
    """Evaluate one independent snapshot per path-loss value."""
    return [evaluate(replace(link, path_loss_db=float(pl)), radio) for pl in path_losses_db]
