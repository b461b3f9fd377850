"""Scan orchestration and scoring engine.

This package holds the classifier, aggregator, snapshot cache and
single-flight scheduler, plus the settings store they persist through.
"""
