"""
Command-line front ends.
- run_throughput : one DL throughput estimate from a YAML config
- sweep_pathloss : throughput vs path loss grid -> metrics.csv / metrics.jsonl
"""
