"""Search and seed pipelines over the advocates table.

Each step takes an AsyncSession so it can run from the API or from scripts.
"""
