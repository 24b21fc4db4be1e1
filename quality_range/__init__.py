"""
Quality Range Service
=====================

Quality-gate range aggregation for the CI platform.

Given a project, a set of pipelines or templates and a set of quality
indicators, this service reports which control-point elements (atoms) are
present in each pipeline/template and which required ones are missing.

This package provides:
- Typed HTTP clients for the process, quality and store services
- Range detail queries and the exist/lack element partitioning
- FastAPI REST endpoints for HTTP access
"""

__version__ = "1.0.0"
__author__ = "CI Quality Team"
