"""Download, list and switch between versions of the educates binary."""

__version__ = "0.1.0"