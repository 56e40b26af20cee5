"""CSV diff toolkit."""
