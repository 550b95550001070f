"""MathLab lending inventory."""

__version__ = "0.1.0"
