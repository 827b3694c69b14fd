# utils/logging.py
# Logging helpers: Python logging for pipeline traces + CSV/JSONL metric records
# (one row per evaluated snapshot / sweep point).
from __future__ import annotations
import os, sys, csv, json, logging
from typing import Optional, Dict, Any

# ------------------------------ base logger ------------------------------ #

def _ensure_dir(p: str) -> str:
    os.makedirs(p, exist_ok=True)
    return p

def setup_logging(
    run_dir: str,
    run_name: str = "phy",
    level: str = "INFO",
    stdout: bool = True,
    logfile: Optional[str] = None
) -> logging.Logger:
    """
    Create a named logger writing to stdout and/or file.
    With the default name, records from the phy.* module loggers end up here.
    """
    _ensure_dir(run_dir)
    logger = logging.getLogger(run_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    # clear duplicate handlers (useful on notebooks/reloads)
    for h in list(logger.handlers):
        logger.removeHandler(h)

    fmt = logging.Formatter("[%(asctime)s] %(levelname)s - %(message)s", "%Y-%m-%d %H:%M:%S")
    if stdout:
        sh = logging.StreamHandler(sys.stdout)
        sh.setFormatter(fmt); logger.addHandler(sh)
    if logfile:
        _ensure_dir(os.path.dirname(logfile) or ".")
        fh = logging.FileHandler(logfile)
        fh.setFormatter(fmt); logger.addHandler(fh)
    return logger

# ------------------------------ CSV / JSONL ------------------------------ #

class CSVLogger:
    """
    Append-only CSV metric logger.
    Header is inferred from first row; later rows may contain a superset of keys (missing -> blank).
    """
    def __init__(self, path: str):
        _ensure_dir(os.path.dirname(path) or ".")
        self.path = path
        self._fieldnames = None
        self._fh = open(self.path, "a", newline="")
        self._writer = None

    def log(self, step: int, row: Dict[str, Any]):
        row = {"step": step, **row}
        if self._fieldnames is None:
            self._fieldnames = list(row.keys())
            self._writer = csv.DictWriter(self._fh, fieldnames=self._fieldnames)
            if os.stat(self.path).st_size == 0:
                self._writer.writeheader()
        else:
            # union of previous + new keys
            new_keys = [k for k in row.keys() if k not in self._fieldnames]
            if new_keys:
                self._fieldnames.extend(new_keys)
                self._writer = csv.DictWriter(self._fh, fieldnames=self._fieldnames)
        self._writer.writerow({k: row.get(k, "") for k in self._fieldnames})  # type: ignore
        self._fh.flush()

    def close(self):
        if not self._fh.closed:
            self._fh.flush(); self._fh.close()

class JSONLLogger:
    """Append-only JSON Lines logger."""
    def __init__(self, path: str):
        _ensure_dir(os.path.dirname(path) or ".")
        self.path = path
        self._fh = open(self.path, "a", encoding="utf-8")

    def log(self, step: int, obj: Dict[str, Any]):
        self._fh.write(json.dumps({"step": step, **obj}, ensure_ascii=False) + "\n")
        self._fh.flush()

    def close(self):
        if not self._fh.closed:
            self._fh.flush(); self._fh.close()

# ------------------------------ factory ------------------------------ #

def build_loggers(output_dir: str, enable_csv: bool = True, enable_jsonl: bool = True):
    """
    Create default (csv, jsonl) loggers under:
      output_dir/metrics.csv, output_dir/metrics.jsonl
    Disabled loggers are returned as None.
    """
    csvlog = CSVLogger(os.path.join(output_dir, "metrics.csv")) if enable_csv else None
    jsonl = JSONLLogger(os.path.join(output_dir, "metrics.jsonl")) if enable_jsonl else None
    return csvlog, jsonl
