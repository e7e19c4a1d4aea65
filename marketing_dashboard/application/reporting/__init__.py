"""Reporting helpers for display formatting."""
