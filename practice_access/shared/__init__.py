"""Shared helpers used across layers (telemetry, utils, request metadata)."""
