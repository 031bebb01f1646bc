"""Types, messages and key handling for the Terra blockchain LCD and RPC interfaces."""

__version__ = "0.1.0"