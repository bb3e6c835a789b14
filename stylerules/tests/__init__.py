"""Tests for stylerules."""
