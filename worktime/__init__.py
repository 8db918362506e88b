"""Personal time tracking: work-time accounting with flex, overtime and vacation balances."""

__version__ = "0.1.0"
