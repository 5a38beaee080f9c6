"""Tests for artifact-resolver."""
