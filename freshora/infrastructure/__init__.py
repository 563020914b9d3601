"""Infraestructura: pool de DB y repositorios (Postgres / in-memory)."""
