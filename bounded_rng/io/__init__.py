"""I/O utilities for uniformity reports."""

from bounded_rng.io.results import ensure_dir, load_report, write_report

__all__ = ["ensure_dir", "load_report", "write_report"]
