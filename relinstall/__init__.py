"""relinstall — fetch, verify, and install prebuilt release binaries."""

__version__ = "0.1.0"
