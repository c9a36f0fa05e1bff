"""Domain package for transaction models and pure finance rules."""
