"""Command-line interface for plughealth."""
