"""Configurable chains of message-passing processes, run on threads until stopped."""

__version__ = "0.1.0"