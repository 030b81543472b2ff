"""A keyboard-driven terminal menu over lines of input, and a file-testing filter."""

__version__ = "5.3.0"