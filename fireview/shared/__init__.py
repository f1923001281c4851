"""Shared helpers used across layers (telemetry, utilities)."""
