"""Support service exposing the inventory bridge over HTTP."""

__version__ = "1.0.0"
