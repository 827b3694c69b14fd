"""Table export helpers (CQI / MCS / TBS -> CSV)."""
