"""Caller-facing job services."""
