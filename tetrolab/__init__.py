"""Falling-block puzzle tooling: board data files, censoring reports, adaptive sampling, training schedules and terminal panels."""

__version__ = "0.1.0"