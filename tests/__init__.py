"""
Test Suite
==========

Test suite matching the quality_range/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: Upstream client and API endpoint testing
"""
