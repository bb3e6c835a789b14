"""Pytest suites for stylerules."""
