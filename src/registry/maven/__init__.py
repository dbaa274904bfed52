"""Maven repository metadata access."""
