"""Shared test fixtures and sample data."""
