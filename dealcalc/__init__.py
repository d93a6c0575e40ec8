"""DealCalc - investment return calculations for real estate deals."""

__version__ = "0.1.0"
