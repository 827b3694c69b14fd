"""
Config loader & validator for the throughput estimator.
- Supports stacking multiple YAMLs (base -> overrides -> scenario)
- CLI-style overrides: key1.key2=value (optional)
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, get_type_hints
import copy
import os
import re
import numpy as np
import yaml

from phy.link_budget import LinkBudgetInputs
from phy.numerology import NUMEROLOGIES
from phy.pipeline import RadioConfig
from phy.throughput import dl_fraction

MIMO_LAYERS = (1, 2, 4, 8)

# ------------------------- dataclass schema ------------------------- #

@dataclass
class RunCfg:
    run_name: str = "nr_tput_default"
    output_dir: str = "runs/nr_tput_default"

@dataclass
class LoggingCfg:
    level: str = "INFO"
    csv: bool = True
    jsonl: bool = True
    logfile: Optional[str] = None

@dataclass
class LinkBudgetCfg:
    path_loss_db: float = 100.0
    tx_power_dbm: float = 30.0
    bandwidth_mhz: float = 100.0
    layers: int = 1                    # MIMO 1x1 / 2x2 / 4x4 / 8x8
    shadowing_db: float = 0.0
    o2i_loss_db: float = 0.0
    beamforming_gain_db: float = 0.0
    temperature_k: float = 300.0

@dataclass
class RadioCfg:
    prb_count: int = 66                # 100 MHz @ 120 kHz SCS
    numerology: int = 3
    prb_per_ue: int = 1
    symbols_per_slot: int = 14
    dmrs_res: int = 0
    overhead_res: int = 0
    dl_ul_ratio: str = "4:1"
    dl_overhead: float = 0.18
    app_packet_bytes: int = 1460
    mac_packet_bytes: int = 1488

@dataclass
class SweepCfg:
    path_loss_start_db: float = 80.0
    path_loss_stop_db: float = 160.0
    path_loss_step_db: float = 5.0

@dataclass
class Config:
    cfg_version: int = 1
    run: RunCfg = field(default_factory=RunCfg)
    logging: LoggingCfg = field(default_factory=LoggingCfg)
    link_budget: LinkBudgetCfg = field(default_factory=LinkBudgetCfg)
    radio: RadioCfg = field(default_factory=RadioCfg)
    sweep: SweepCfg = field(default_factory=SweepCfg)

# --------------------------- load & merge --------------------------- #

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge b into a (modifies and returns a)."""
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(a.get(k), dict):
            _deep_merge(a[k], v)
        else:
            a[k] = copy.deepcopy(v)
    return a

def _load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}

def _interpolate_env_vars(d: Dict[str, Any]) -> Dict[str, Any]:
    """Expand ${VAR} and ${a.b} style placeholders if present."""
    pat = re.compile(r"\$\{([^}]+)\}")
    def _expand(val: Any, ctx: Dict[str, Any]) -> Any:
        if isinstance(val, str):
            def repl(m):
                key = m.group(1)
                # support ${ENV} or ${a.b.c} from ctx
                if key in os.environ:
                    return os.environ[key]
                cur = ctx
                for part in key.split("."):
                    cur = cur.get(part, "") if isinstance(cur, dict) else ""
                return str(cur)
            return pat.sub(repl, val)
        if isinstance(val, dict):
            return {k: _expand(v, ctx) for k, v in val.items()}
        if isinstance(val, list):
            return [_expand(v, ctx) for v in val]
        return val
    return _expand(d, d)

def load_config(paths: List[str], overrides: Optional[List[str]] = None) -> Config:
    """Load zero or more YAML files and apply CLI-style overrides."""
    merged: Dict[str, Any] = {}
    for p in paths:
        y = _load_yaml(p)
        _deep_merge(merged, y)
    if overrides:
        for ov in overrides:
            # example: "radio.prb_count=100"
            if "=" not in ov:
                raise ValueError(f"override must look like key.sub=value, got '{ov}'")
            key, val = ov.split("=", 1)
            _apply_override(merged, key.strip(), _parse_val(val.strip()))
    merged = _interpolate_env_vars(merged)
    # materialize dataclasses
    cfg = _to_dataclass(Config, merged)
    validate_config(cfg)
    return cfg

# --------------------------- overrides ----------------------------- #

def _parse_val(v: str) -> Any:
    if v.lower() in ("true", "false"):
        return v.lower() == "true"
    try:
        if "." in v or "e" in v.lower():
            return float(v)
        return int(v)
    except ValueError:
        return v  # string

def _apply_override(d: Dict[str, Any], dotted: str, value: Any):
    cur = d
    parts = dotted.split(".")
    for p in parts[:-1]:
        if p not in cur or not isinstance(cur[p], dict):
            cur[p] = {}
        cur = cur[p]
    cur[parts[-1]] = value

# ---------------------- dict -> dataclass -------------------------- #

def _to_dataclass(cls, data: Dict[str, Any]):
    """Recursively instantiate dataclasses from dict"""
    if not hasattr(cls, "__dataclass_fields__"):
        return data
    unknown = set(data) - set(cls.__dataclass_fields__)
    if unknown:
        raise ValueError(f"unknown keys for {cls.__name__}: {sorted(unknown)}")
    hints = get_type_hints(cls)
    kwargs = {}
    for name in cls.__dataclass_fields__:
        if name not in data:
            continue
        ftype = hints[name]
        val = data[name]
        if hasattr(ftype, "__dataclass_fields__"):
            kwargs[name] = _to_dataclass(ftype, val or {})
        elif ftype is float and isinstance(val, int) and not isinstance(val, bool):
            kwargs[name] = float(val)
        else:
            kwargs[name] = val
    return cls(**kwargs)

# ----------------------------- validate --------------------------- #

def validate_config(cfg: Config):
    lb, radio, sw = cfg.link_budget, cfg.radio, cfg.sweep
    assert lb.bandwidth_mhz > 0, "bandwidth_mhz must be > 0"
    assert lb.temperature_k > 0, "temperature_k must be > 0"
    assert radio.prb_count > 0, "prb_count must be > 0"
    assert radio.prb_per_ue > 0, "prb_per_ue must be > 0"
    assert radio.symbols_per_slot > 0, "symbols_per_slot must be > 0"
    assert 0.0 <= radio.dl_overhead < 1.0, "dl_overhead must be in [0,1)"
    assert radio.app_packet_bytes > 0 and radio.mac_packet_bytes > 0, "packet sizes must be > 0"
    assert sw.path_loss_step_db > 0, "sweep step must be > 0"
    assert sw.path_loss_stop_db >= sw.path_loss_start_db, "sweep stop must be >= start"
    if lb.layers not in MIMO_LAYERS:
        raise ValueError(f"link_budget.layers must be one of {MIMO_LAYERS}, got {lb.layers}")
    if radio.numerology not in NUMEROLOGIES:
        raise ValueError(f"radio.numerology must be one of {sorted(NUMEROLOGIES)}, got {radio.numerology}")
    dl_fraction(radio.dl_ul_ratio)  # raises on a malformed ratio
    if cfg.logging.level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        raise ValueError(f"Unknown logging level '{cfg.logging.level}'")

def save_resolved_config(cfg: Config, out_path: str):
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(asdict(cfg), f, sort_keys=False, allow_unicode=True)

# ------------------------- pipeline inputs ------------------------- #

def to_link_inputs(cfg: Config) -> LinkBudgetInputs:
    lb = cfg.link_budget
    return LinkBudgetInputs(
        path_loss_db=lb.path_loss_db,
        tx_power_dbm=lb.tx_power_dbm,
        bandwidth_hz=lb.bandwidth_mhz * 1e6,
        layers=lb.layers,
        shadowing_db=lb.shadowing_db,
        o2i_loss_db=lb.o2i_loss_db,
        beamforming_gain_db=lb.beamforming_gain_db,
        temperature_k=lb.temperature_k,
    )

def to_radio_config(cfg: Config) -> RadioConfig:
    return RadioConfig(**asdict(cfg.radio))

def sweep_path_losses(cfg: Config) -> np.ndarray:
    """Inclusive path-loss grid [start, stop] in dB."""
    sw = cfg.sweep
    return np.arange(sw.path_loss_start_db, sw.path_loss_stop_db + 0.5 * sw.path_loss_step_db,
                     sw.path_loss_step_db)

# ----------------------------- example ---------------------------- #
if __name__ == "__main__":
    # e.g. python configs/loader.py configs/default.yaml radio.prb_count=100
    import sys
    files = [p for p in sys.argv[1:] if "=" not in p]
    ovs = [p for p in sys.argv[1:] if "=" in p]
    cfg = load_config(files, ovs)
    print(yaml.safe_dump(asdict(cfg), sort_keys=False, allow_unicode=True))
