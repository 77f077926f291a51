"""Mediashelf backend packages."""
