"""Pure library code with no database or framework dependencies."""
