"""Business logic services operating on async database sessions."""
