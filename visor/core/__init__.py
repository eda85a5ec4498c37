"""Core domain: models, categories, sessions and workspace handling."""
