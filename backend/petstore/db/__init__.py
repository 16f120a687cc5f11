"""Database metadata — declarative base shared by ORM models."""
