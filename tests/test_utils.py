# tests/test_utils.py
import csv
import json
import logging
from utils.logging import CSVLogger, JSONLLogger, setup_logging, build_loggers

def test_csv_jsonl_logging(tmp_path):
    csvp = tmp_path / "m.csv"
    jlp = tmp_path / "m.jsonl"
    csvlog = CSVLogger(str(csvp))
    jsonllog = JSONLLogger(str(jlp))
    csvlog.log(1, {"tbs": 1160, "app_Mbps": 393.35})
    csvlog.log(2, {"tbs": 32, "app_Mbps": 10.9})
    jsonllog.log(1, {"tbs": 1160, "app_Mbps": 393.35})
    csvlog.close(); jsonllog.close()
    with open(csvp, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["step"] for r in rows] == ["1", "2"] and rows[1]["tbs"] == "32"
    with open(jlp, "r") as f:
        rec = json.loads(f.readline())
    assert rec["step"] == 1 and rec["tbs"] == 1160

def test_build_loggers_respects_flags(tmp_path):
    csvlog, jsonl = build_loggers(str(tmp_path), enable_csv=False)
    assert csvlog is None and jsonl is not None
    jsonl.close()
    assert (tmp_path / "metrics.jsonl").exists()

def test_setup_logging_collects_module_loggers(tmp_path):
    logfile = tmp_path / "logs" / "run.log"
    logger = setup_logging(str(tmp_path), level="DEBUG", stdout=False, logfile=str(logfile))
    logging.getLogger("phy.tbs").debug("child record")
    for h in logger.handlers:
        h.flush()
    assert "child record" in logfile.read_text()
    # re-running does not stack handlers
    logger = setup_logging(str(tmp_path), stdout=True)
    assert len(logger.handlers) == 1
