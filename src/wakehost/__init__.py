"""wakehost: resolve a machine's adapters and wake it over the LAN."""

__version__ = "0.1.0"
