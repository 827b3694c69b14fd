# tests/test_config.py
import os
import pytest
import yaml
from configs.loader import (Config, load_config, save_resolved_config, to_link_inputs, to_radio_config,
                            sweep_path_losses)

DEFAULT_YAML = os.path.join(os.path.dirname(__file__), "..", "configs", "default.yaml")

def test_default_yaml_matches_dataclass_defaults():
    assert load_config([DEFAULT_YAML]) == load_config([]) == Config()

def test_overrides_and_conversion():
    cfg = load_config([DEFAULT_YAML], ["radio.prb_count=100", "link_budget.layers=4",
                                       "link_budget.bandwidth_mhz=50", "radio.dl_ul_ratio=7:3"])
    link, radio = to_link_inputs(cfg), to_radio_config(cfg)
    assert radio.prb_count == 100 and radio.dl_ul_ratio == "7:3"
    assert link.layers == 4 and link.bandwidth_hz == 50e6
    assert isinstance(cfg.link_budget.bandwidth_mhz, float)

def test_stacked_yaml_and_env_interpolation(tmp_path, monkeypatch):
    monkeypatch.setenv("NR_RUN_TAG", "urban")
    over = tmp_path / "urban.yaml"
    over.write_text(yaml.safe_dump({
        "run": {"run_name": "${NR_RUN_TAG}", "output_dir": "runs/${run.run_name}"},
        "link_budget": {"o2i_loss_db": 20},
    }))
    cfg = load_config([DEFAULT_YAML, str(over)])
    assert cfg.run.run_name == "urban"
    assert cfg.link_budget.o2i_loss_db == 20.0
    assert cfg.link_budget.tx_power_dbm == 30.0       # untouched base value

@pytest.mark.parametrize("ov, exc", [
    ("link_budget.layers=3", ValueError),
    ("radio.numerology=6", ValueError),
    ("radio.dl_ul_ratio=4-1", ValueError),
    ("logging.level=LOUD", ValueError),
    ("radio.unknown_key=1", ValueError),
    ("radio.prb_count=0", AssertionError),
    ("sweep.path_loss_step_db=0", AssertionError),
])
def test_validation_errors(ov, exc):
    with pytest.raises(exc):
        load_config([DEFAULT_YAML], [ov])

def test_sweep_grid_is_inclusive():
    grid = sweep_path_losses(load_config([], ["sweep.path_loss_start_db=100", "sweep.path_loss_stop_db=110",
                                              "sweep.path_loss_step_db=2.5"]))
    assert list(grid) == [100.0, 102.5, 105.0, 107.5, 110.0]

def test_save_resolved_config(tmp_path):
    cfg = load_config([DEFAULT_YAML], ["radio.prb_count=33"])
    out = tmp_path / "out" / "resolved.yaml"
    save_resolved_config(cfg, str(out))
    assert load_config([str(out)]) == cfg
