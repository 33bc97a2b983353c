"""Pytest configuration: plots are drawn off screen."""
import os

os.environ.setdefault("MPLBACKEND", "Agg")
