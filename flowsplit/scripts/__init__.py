"""Command line scripts for working with flow nodes."""
