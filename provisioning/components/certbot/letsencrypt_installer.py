# provisioning/components/certbot/letsencrypt_installer.py
# -*- coding: utf-8 -*-
"""
Let's Encrypt certificate for the daemon, obtained with certbot's
standalone authenticator.

Failure to obtain a certificate never fails the installation; it is
reported as a warning and the operator can retry by hand.
"""

import subprocess
from pathlib import Path

from common.command_utils import log_step, run_elevated_command
from common.system_utils import systemctl
from provisioning.base_installer import BaseInstaller
from provisioning.registry import InstallerRegistry
from wings_setup.config_models import InstallConfiguration

FAILURE_WARNING = "The process of obtaining a Let's Encrypt certificate failed!"


@InstallerRegistry.register(
    name="letsencrypt",
    metadata={
        "dependencies": ["system_update"],
        "description": "Let's Encrypt certificate (certbot)",
    },
)
class LetsEncryptInstaller(BaseInstaller):
    """
    Installs certbot and requests a certificate for the configured FQDN.

    nginx, if present, is stopped while certbot binds port 80 and started
    again afterwards.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.certificate_obtained = False

    @classmethod
    def is_enabled(cls, install_config: InstallConfiguration) -> bool:
        return install_config.tls_enabled

    def certificate_dir(self) -> Path:
        return Path(self.app_settings.letsencrypt_live_dir) / self.install_config.tls_hostname

    def is_installed(self) -> bool:
        return self.certificate_dir().is_dir()

    def certbot_command(self):
        return [
            "certbot",
            "certonly",
            "--no-eff-email",
            "--email",
            self.install_config.tls_email,
            "--standalone",
            "-d",
            self.install_config.tls_hostname,
        ]

    def _obtain_certificate(self) -> bool:
        self.package_manager.install("certbot")

        systemctl(["stop", "nginx"], self.app_settings, self.logger, check=False)
        try:
            result: subprocess.CompletedProcess = run_elevated_command(
                self.certbot_command(),
                self.app_settings,
                check=False,
                current_logger=self.logger,
            )
        finally:
            systemctl(["start", "nginx"], self.app_settings, self.logger, check=False)

        return result.returncode == 0 and self.certificate_dir().is_dir()

    def install(self) -> bool:
        log_step(
            f"{self.symbols.get('step', '')} Obtaining a certificate for {self.install_config.tls_hostname}..",
            "info",
            self.logger,
            self.app_settings,
        )
        try:
            self.certificate_obtained = self._obtain_certificate()
        except Exception as e:
            self.logger.warning(f"certbot could not be run: {e}")
            self.certificate_obtained = False

        if not self.certificate_obtained:
            log_step(
                f"{self.symbols.get('warning', '')} {FAILURE_WARNING}",
                "warning",
                self.logger,
                self.app_settings,
            )
        return True
