"""Bundled data files for plughealth."""
