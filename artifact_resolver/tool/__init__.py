"""Command line tool for artifact-resolver."""
