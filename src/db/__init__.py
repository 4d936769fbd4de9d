"""
Database Module
-------------
Handles database connections, ORM models, and seed data.
Uses SQLAlchemy for PostgreSQL (or SQLite) and defines the schema for campsites and reservations.
"""
