"""Reports over JSONL solve event logs."""
