"""Product catalog service.

A FastAPI application exposing CRUD and name search over products, backed by
SQLModel storage and guarded by a shared API key.
"""

__version__ = "0.1.0"
