"""Tests for artifact credentials."""
