"""Shared helpers: observer signals and JSON I/O."""

from .jsonio import read_json, write_json
from .signal import Signal

__all__ = ["Signal", "read_json", "write_json"]
