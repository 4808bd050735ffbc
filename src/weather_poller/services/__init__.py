"""Shared utilities (HTTP session)."""
