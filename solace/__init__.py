"""Backend package: DB models, search/seed pipelines, API and browse view.

This package serves the advocates directory: a paginated free-text query
endpoint, an idempotent seed loader, and the client-side browse state.
"""
