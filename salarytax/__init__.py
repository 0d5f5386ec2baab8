"""Salary tax engine: progressive bands, payroll extras and take-home pay."""
from __future__ import annotations

__version__ = "0.1.0"
