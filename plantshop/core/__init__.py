"""Core app configuration, database, security and logging setup."""
