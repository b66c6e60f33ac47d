"""TASKDESK: terminal client for a remote task collection."""

__version__ = "1.0.0"
