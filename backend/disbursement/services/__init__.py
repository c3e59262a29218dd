"""Disbursement services"""
from .clock import Clock, SystemClock, ManualClock

# The registry module is not imported here: it depends on the models
# package, which itself imports the clock from this package.

__all__ = [
    "Clock",
    "SystemClock",
    "ManualClock",
]
