"""Infrastructure adapters for the identity ports."""
