"""MariaDB database server."""
