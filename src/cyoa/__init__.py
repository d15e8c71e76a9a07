"""Choose-your-own-adventure story engine."""

__version__ = "1.0.0"
