"""Let's Encrypt certificates via certbot."""
