"""Reporters for scan outcomes."""
