"""Shared helpers for logging and quote selection."""
