"""Pagewise: CRUD service with bidirectional cursor pagination."""

__version__ = "1.0.0"
