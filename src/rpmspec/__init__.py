"""RPM spec generation from resolved Forge modules."""
