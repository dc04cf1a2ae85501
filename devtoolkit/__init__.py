"""Developer utilities for PE headers, captured packet headers, hot-key settings and installer packaging."""

__version__ = "0.1.0"