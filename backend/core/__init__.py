"""Core backend infrastructure for the World Cup Predictor backend.

This package contains configuration, logging, database, clock, session and
dependency helpers used by the FastAPI application entrypoint.
"""
