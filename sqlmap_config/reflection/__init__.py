"""Object creation and property metadata strategies."""
