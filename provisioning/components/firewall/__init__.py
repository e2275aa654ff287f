"""
Firewall configuration (ufw on Debian/Ubuntu, firewalld on CentOS).

The opened ports are a fixed policy: SSH, the daemon API and the daemon SFTP
port, plus HTTP/HTTPS when a Let's Encrypt certificate is requested.
"""

from typing import List

from wings_setup.config_models import DAEMON_PORTS, TLS_PORTS, InstallConfiguration

# Ports opened by service name rather than by number.
PORT_SERVICE_NAMES = {22: "ssh", 80: "http", 443: "https"}


def opened_ports(install_config: InstallConfiguration) -> List[int]:
    ports = list(DAEMON_PORTS)
    if install_config.tls_enabled:
        ports.extend(TLS_PORTS)
    return ports
