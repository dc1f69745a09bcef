"""Logging, tracing and small helpers."""
