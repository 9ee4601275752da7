"""Core infrastructure: configuration, database, logging, and security."""
