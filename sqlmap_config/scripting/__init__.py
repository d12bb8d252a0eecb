"""Statement language drivers."""
