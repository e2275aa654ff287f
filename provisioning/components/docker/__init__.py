"""Docker Engine container runtime."""
