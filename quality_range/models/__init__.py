"""
Data Models
===========

Pydantic data models for request/response validation and upstream payloads.

Models:
- schemas: upstream envelopes, pipeline/template structures, range results
"""
