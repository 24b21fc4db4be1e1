"""
Core Business Logic
==================

Core business logic modules for quality range queries.

Modules:
- clients: HTTP clients for the process, quality and store services
- hash_ids: hashed identifier decoding
- elements: element family classification and display names
- range_query: pipeline/template range detail and element partitioning
"""
