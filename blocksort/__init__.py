"""Burrows-Wheeler block sorting transforms, suffix array construction and a null output stream."""

__version__ = "0.1.0"
__all__ = ["block_codec", "bwt", "bwts", "divsufsort", "nullstream", "sssort", "trsort"]