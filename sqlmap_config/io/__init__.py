"""Resource loading and package scanning."""
