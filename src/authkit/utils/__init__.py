"""Logging, HTTP tracing and client construction helpers."""
