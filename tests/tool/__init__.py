"""Tests for the artifact-resolver command line tool."""
