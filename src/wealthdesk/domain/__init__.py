"""Domain contracts."""
