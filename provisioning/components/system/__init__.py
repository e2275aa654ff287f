"""Operating system package refresh."""
