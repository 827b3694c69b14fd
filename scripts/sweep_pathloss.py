# scripts/sweep_pathloss.py
# Throughput vs path loss: one independent pipeline run per grid point, written to metrics.csv
from __future__ import annotations
import argparse, os
from typing import List, Optional

from configs.loader import load_config, save_resolved_config, to_link_inputs, to_radio_config, sweep_path_losses
from phy.pipeline import PipelineResult, sweep
from utils.logging import setup_logging, build_loggers

def main(argv: Optional[List[str]] = None) -> List[PipelineResult]:
    ap = argparse.ArgumentParser(description="DL throughput vs path loss sweep")
    ap.add_argument("--config", type=str, action="append", default=[], help="YAML files, merged in order")
    ap.add_argument("overrides", nargs="*", help="dotted overrides, e.g. sweep.path_loss_step_db=2")
    args = ap.parse_args(argv)

    cfg = load_config(args.config, args.overrides)
    logger = setup_logging(cfg.run.output_dir, level=cfg.logging.level, logfile=cfg.logging.logfile)
    save_resolved_config(cfg, os.path.join(cfg.run.output_dir, "resolved_config.yaml"))

    grid = sweep_path_losses(cfg)
    logger.info("[SWEEP] %d points, PL %.1f..%.1f dB", len(grid), grid[0], grid[-1])
    results = sweep(to_link_inputs(cfg), to_radio_config(cfg), grid)

    csvlog, jsonl = build_loggers(cfg.run.output_dir, enable_csv=cfg.logging.csv, enable_jsonl=cfg.logging.jsonl)
    for i, (pl, res) in enumerate(zip(grid, results)):
        row = {"path_loss_db": float(pl), **res.as_dict()}
        if csvlog is not None: csvlog.log(i, row)
        if jsonl is not None: jsonl.log(i, row)
        logger.info("PL=%6.1f dB  CQI=%2d  MCS=%2d  TBS=%5d  app=%9.3f Mbps",
                    pl, res.cqi_index, res.mcs_index, res.transport_block_size,
                    res.application_throughput_bps / 1e6)
    for lg in (csvlog, jsonl):
        if lg is not None: lg.close()
    return results

if __name__ == "__main__":
    main()
