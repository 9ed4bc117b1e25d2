"""Desktop simulator window."""
