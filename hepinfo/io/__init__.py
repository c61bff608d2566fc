"""Export of per-event info snapshots."""

from .parquet import read_event_table, write_event_table

__all__ = ["read_event_table", "write_event_table"]
