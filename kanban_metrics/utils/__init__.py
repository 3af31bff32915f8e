"""Shared utilities: statistics, datetime helpers and error handling."""
