"""Bit-packing and delta bit-packing of 32-bit integer columns, column files and benchmark column generators."""

__version__ = "0.1.0"
__all__ = ["__version__"]