"""Command line interface for api-diff-report."""
