"""Wings daemon binary and systemd unit."""
