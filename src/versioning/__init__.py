"""Version ordering and dependency resolution."""
