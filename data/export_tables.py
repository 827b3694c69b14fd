# data/export_tables.py
# Dump the CQI / MCS / TBS tables used by the pipeline to CSV (for plotting / cross-checking).
import os
import csv
from dataclasses import astuple, fields

from phy.tables import CQI_TABLE, MCS_TABLE, TBS_TABLE, CqiEntry, McsEntry

def main(out_dir="data/tables"):
    os.makedirs(out_dir, exist_ok=True)
    written = []
    for name, cls, rows in (("cqi", CqiEntry, CQI_TABLE), ("mcs", McsEntry, MCS_TABLE)):
        path = os.path.join(out_dir, f"{name}_table.csv")
        with open(path, "w", newline="") as f:
            w = csv.writer(f)
            w.writerow([fl.name for fl in fields(cls)])
            for r in rows:
                w.writerow(astuple(r))
        written.append(path)
    path = os.path.join(out_dir, "tbs_table.csv")
    with open(path, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["tbs_bits"])
        for v in TBS_TABLE:
            w.writerow([v])
    written.append(path)
    for p in written:
        print(f"Wrote {p}")
    return written

if __name__ == "__main__":
    main()
