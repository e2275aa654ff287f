# wings_setup/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the installer (URLs, paths,
timeouts), the detected operating system identity and the immutable
installation configuration collected from the operator.
It utilizes Pydantic for data validation and settings management.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
WINGS_REPOSITORY_DEFAULT: str = "pterodactyl/wings"
GITHUB_API_URL_DEFAULT: str = "https://api.github.com"
WINGS_DOWNLOAD_URL_DEFAULT: str = "https://github.com/pterodactyl/wings/releases/latest/download/wings_linux_amd64"
INSTALLER_SCRIPTS_BASE_URL_DEFAULT: str = "https://raw.githubusercontent.com/vilhelmprytz/pterodactyl-installer/master"
CONFIG_DIR_DEFAULT: str = "/etc/pterodactyl"
WINGS_BINARY_PATH_DEFAULT: str = "/usr/local/bin/wings"
SYSTEMD_UNIT_PATH_DEFAULT: str = "/etc/systemd/system/wings.service"
LETSENCRYPT_LIVE_DIR_DEFAULT: str = "/etc/letsencrypt/live"
DOCKER_DOWNLOAD_BASE_URL_DEFAULT: str = "https://download.docker.com/linux"
DOCKER_CENTOS_REPO_URL_DEFAULT: str = "https://download.docker.com/linux/centos/docker-ce.repo"
MARIADB_REPO_SETUP_URL_DEFAULT: str = "https://downloads.mariadb.com/MariaDB/mariadb_repo_setup"
REQUEST_TIMEOUT_DEFAULT: int = 120
LOG_PREFIX_DEFAULT: str = "[WINGS-SETUP]"

WINGS_DOCS_URL: str = "https://pterodactyl.io/wings/1.0/installing.html#configure-daemon"

# Fixed firewall policy: SSH, daemon API, daemon SFTP.
DAEMON_PORTS: tuple = (22, 8443, 2096)
TLS_PORTS: tuple = (80, 443)

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅", "error": "❌", "warning": "⚠️", "info": "ℹ️",
    "step": "➡️", "gear": "⚙️", "package": "📦", "rocket": "🚀",
    "sparkles": "✨", "critical": "🔥", "debug": "🐛",
}


class Distro(str, Enum):
    """Operating system families known to the installer."""

    UBUNTU = "ubuntu"
    DEBIAN = "debian"
    CENTOS = "centos"
    OTHER = "other"

    @classmethod
    def from_id(cls, distro_id: str) -> "Distro":
        try:
            return cls(distro_id.strip().lower())
        except ValueError:
            return cls.OTHER


class FirewallBackend(str, Enum):
    """Firewall tool configured by the installer."""

    NONE = "none"
    UFW = "ufw"
    FIREWALLD = "firewalld"


class OSIdentity(BaseModel):
    """Normalized operating system identity produced by the prober."""

    model_config = ConfigDict(frozen=True)

    distro_id: str = Field(description="Lowercased distribution identifier as detected.")
    version: str = Field(description="Raw version string, e.g. '20.04' or '?'.")
    major_version: str = Field(description="Text before the first '.' of the version.")
    architecture: str = Field(default="", description="Machine hardware name (uname -m).")
    source: str = Field(default="", description="Detection source that produced this identity.")

    @property
    def distro(self) -> Distro:
        return Distro.from_id(self.distro_id)

    @property
    def major(self) -> Optional[int]:
        return int(self.major_version) if self.major_version.isdigit() else None


class InstallConfiguration(BaseModel):
    """
    Options collected from the operator before installation starts.

    The record is frozen; the orchestrator only ever reads it.
    """

    model_config = ConfigDict(frozen=True)

    distro: Distro
    distro_major_version: int
    architecture: str = ""
    install_database: bool = False
    firewall_backend: FirewallBackend = FirewallBackend.NONE
    tls_enabled: bool = False
    tls_hostname: str = ""
    tls_email: str = ""

    @model_validator(mode="after")
    def _check_invariants(self) -> "InstallConfiguration":
        if self.firewall_backend == FirewallBackend.UFW and self.distro not in (
            Distro.UBUNTU,
            Distro.DEBIAN,
        ):
            raise ValueError(
                f"ufw can only be configured on Ubuntu or Debian, not {self.distro.value}"
            )
        if (
            self.firewall_backend == FirewallBackend.FIREWALLD
            and self.distro != Distro.CENTOS
        ):
            raise ValueError(
                f"firewalld can only be configured on CentOS, not {self.distro.value}"
            )
        if self.tls_enabled:
            if not self.tls_hostname.strip() or not self.tls_email.strip():
                raise ValueError(
                    "tls_hostname and tls_email are required when TLS is enabled"
                )
        elif self.tls_hostname or self.tls_email:
            raise ValueError(
                "tls_hostname and tls_email must be empty when TLS is disabled"
            )
        return self

    @property
    def firewall_enabled(self) -> bool:
        return self.firewall_backend != FirewallBackend.NONE


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_prefix="WINGS_INSTALLER_", extra="ignore")

    wings_repository: str = Field(default=WINGS_REPOSITORY_DEFAULT,
                                  description="owner/repo of the daemon on the release API.")
    github_api_url: str = Field(default=GITHUB_API_URL_DEFAULT,
                                description="Base URL of the source-hosting release API.")
    wings_download_url: str = Field(default=WINGS_DOWNLOAD_URL_DEFAULT,
                                    description="URL of the latest compiled daemon binary.")
    installer_scripts_base_url: str = Field(default=INSTALLER_SCRIPTS_BASE_URL_DEFAULT,
                                            description="Raw base URL of the companion script repository.")
    config_dir: str = Field(default=CONFIG_DIR_DEFAULT,
                            description="Daemon configuration directory, also the prior-install sentinel.")
    wings_binary_path: str = Field(default=WINGS_BINARY_PATH_DEFAULT,
                                   description="Where the daemon binary is installed.")
    systemd_unit_path: str = Field(default=SYSTEMD_UNIT_PATH_DEFAULT,
                                   description="Where the daemon service unit is written.")
    letsencrypt_live_dir: str = Field(default=LETSENCRYPT_LIVE_DIR_DEFAULT,
                                      description="Directory holding one sub-directory per issued certificate.")
    docker_download_base_url: str = Field(default=DOCKER_DOWNLOAD_BASE_URL_DEFAULT,
                                          description="Base URL of the Docker package repositories.")
    docker_centos_repo_url: str = Field(default=DOCKER_CENTOS_REPO_URL_DEFAULT,
                                        description="Docker CE .repo file for yum/dnf.")
    mariadb_repo_setup_url: str = Field(default=MARIADB_REPO_SETUP_URL_DEFAULT,
                                        description="MariaDB repository setup script.")
    request_timeout: int = Field(default=REQUEST_TIMEOUT_DEFAULT,
                                 description="Timeout in seconds for HTTP requests.")
    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT,
                            description="Prefix for log messages from the installer.")

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    @property
    def wings_service_url(self) -> str:
        return f"{self.installer_scripts_base_url.rstrip('/')}/configs/wings.service"
