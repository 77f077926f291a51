"""Typer command line interface for the Mediashelf API."""
