"""Shared test fixtures for sum tree tests."""
