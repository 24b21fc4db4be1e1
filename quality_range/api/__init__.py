"""
FastAPI REST Endpoints
======================

REST API endpoints for HTTP access to the range detail queries.

Endpoints:
- POST /api/v1/projects/{project_id}/pipelines/range-detail: Pipeline coverage
- POST /api/v1/projects/{project_id}/templates/range-detail: Template coverage
- GET /health: Health check endpoint
"""
