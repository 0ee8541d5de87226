"""Core library for class-index.

The preferred executable entrypoints remain at the repo root:
- app.py (FastAPI)
- generate_index.py (CLI)
- config.py (YAML config)

This package contains the reusable building blocks (scanner, index builder, etc.).
"""
