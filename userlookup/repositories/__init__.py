"""Database access helpers (one module per aggregate)."""
