"""Infraestructura: pool PostgreSQL y adapters de repositorios."""
