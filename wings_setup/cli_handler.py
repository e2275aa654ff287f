# wings_setup/cli_handler.py
# -*- coding: utf-8 -*-
"""
Handles Command Line Interface (CLI) interactions for the Wings installer:
yes/no and free-text prompts, option collection, banners and the completion
summary.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from common.command_utils import get_symbols, log_step
from wings_setup.compatibility import DistroProfile
from wings_setup.config_models import (
    DAEMON_PORTS,
    WINGS_DOCS_URL,
    AppSettings,
    FirewallBackend,
    InstallConfiguration,
    OSIdentity,
)
from wings_setup.exceptions import InstallationCancelled

module_logger = logging.getLogger(__name__)

InputFunc = Callable[[str], str]

BRAKE_WIDTH = 70


def print_brake(length: int = BRAKE_WIDTH) -> None:
    print("#" * length)


def hyperlink(url: str) -> str:
    """Wrap a URL in an OSC 8 terminal hyperlink."""
    return f"\033]8;;{url}\a{url}\033]8;;\a"


def cli_prompt_yes_no(
    prompt_message: str,
    app_settings: AppSettings,
    current_logger_instance: Optional[logging.Logger] = None,
    input_func: InputFunc = input,
) -> bool:
    """
    Ask a (y/N) question. Any answer starting with y or Y counts as yes;
    EOF counts as no.
    """
    logger_to_use = (
        current_logger_instance if current_logger_instance else module_logger
    )
    symbols = get_symbols(app_settings)
    try:
        user_input = input_func(f"* {prompt_message} (y/N): ").strip().lower()
        return user_input.startswith("y")
    except EOFError:
        log_step(
            f"{symbols.get('warning', '!')} No user input (EOF), defaulting to 'N' for prompt: '{prompt_message}'",
            "warning",
            logger_to_use,
            app_settings,
        )
        return False


def cli_prompt_text(
    prompt_message: str,
    input_func: InputFunc = input,
) -> str:
    """Ask for a free-text answer; EOF yields an empty string."""
    try:
        return input_func(f"* {prompt_message}: ").strip()
    except EOFError:
        return ""


class OptionCollector:
    """
    Asks the operator which optional features to install and builds the
    InstallConfiguration.
    """

    def __init__(
        self,
        identity: OSIdentity,
        profile: DistroProfile,
        app_settings: AppSettings,
        logger: Optional[logging.Logger] = None,
        input_func: InputFunc = input,
    ):
        self.identity = identity
        self.profile = profile
        self.app_settings = app_settings
        self.logger = logger or logging.getLogger(self.__class__.__name__)
        self.input_func = input_func
        self.symbols = get_symbols(app_settings)

    def _ask(self, question: str) -> bool:
        return cli_prompt_yes_no(
            question, self.app_settings, self.logger, self.input_func
        )

    def _error(self, message: str) -> None:
        log_step(
            f"{self.symbols.get('error', '❌')} {message}",
            "error",
            self.logger,
            self.app_settings,
        )

    def _warning(self, message: str) -> None:
        log_step(
            f"{self.symbols.get('warning', '!')} {message}",
            "warning",
            self.logger,
            self.app_settings,
        )

    def certificate_exists(self, hostname: str) -> bool:
        return (Path(self.app_settings.letsencrypt_live_dir) / hostname).is_dir()

    def ask_database(self) -> bool:
        self._warning(
            "If you installed the Pterodactyl panel on the same machine, do not use this option or the script will fail!"
        )
        return self._ask(
            "Would you like to install MariaDB (MySQL) server on the daemon as well?"
        )

    def ask_firewall(self) -> FirewallBackend:
        backend = self.profile.firewall_backend
        if backend == FirewallBackend.UFW:
            question = "Do you want to automatically configure UFW (firewall)?"
        elif backend == FirewallBackend.FIREWALLD:
            question = "Do you want to automatically configure firewall-cmd (firewall)?"
        else:
            return FirewallBackend.NONE
        return backend if self._ask(question) else FirewallBackend.NONE

    def ask_letsencrypt(self, firewall_backend: FirewallBackend) -> bool:
        if firewall_backend == FirewallBackend.NONE:
            self._warning(
                "Let's Encrypt requires port 80/443 to be opened! You have opted out of the automatic "
                "firewall configuration; use this at your own risk (if port 80/443 is closed, the script will fail)!"
            )
        self._warning(
            "You cannot use Let's Encrypt with your hostname as an IP address! "
            "It must be a FQDN (e.g. node.example.org)."
        )
        return self._ask(
            "Do you want to automatically configure HTTPS using Let's Encrypt?"
        )

    def ask_hostname(self) -> Optional[str]:
        """
        Prompt until a non-empty hostname without an existing certificate is
        given. Returns None if the operator gives up on HTTPS.
        """
        while True:
            hostname = cli_prompt_text(
                "Set the FQDN to use for Let's Encrypt (node.example.com)",
                self.input_func,
            )
            if not hostname:
                self._error("FQDN cannot be empty")
                continue
            if self.certificate_exists(hostname):
                self._error("A certificate with this FQDN already exists!")
                if not self._ask(
                    "Do you still want to automatically configure HTTPS using Let's Encrypt?"
                ):
                    return None
                continue
            return hostname

    def ask_email(self) -> str:
        while True:
            email = cli_prompt_text(
                "Enter email address for Let's Encrypt", self.input_func
            )
            if email:
                return email
            self._error("Email cannot be empty")

    def collect(self) -> InstallConfiguration:
        """
        Run every prompt and return the frozen configuration.

        Raises:
            InstallationCancelled: If the final confirmation is rejected.
        """
        install_database = self.ask_database()
        firewall_backend = self.ask_firewall()

        tls_enabled = self.ask_letsencrypt(firewall_backend)
        tls_hostname = ""
        tls_email = ""
        if tls_enabled:
            hostname = self.ask_hostname()
            if hostname is None:
                tls_enabled = False
            else:
                tls_hostname = hostname
                tls_email = self.ask_email()

        configuration = InstallConfiguration(
            distro=self.identity.distro,
            distro_major_version=self.identity.major,
            architecture=self.identity.architecture,
            install_database=install_database,
            firewall_backend=firewall_backend,
            tls_enabled=tls_enabled,
            tls_hostname=tls_hostname,
            tls_email=tls_email,
        )

        if not self._ask("Proceed with installation?"):
            raise InstallationCancelled("Installation aborted")
        return configuration


def collect_install_options(
    identity: OSIdentity,
    profile: DistroProfile,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    input_func: InputFunc = input,
) -> InstallConfiguration:
    return OptionCollector(
        identity, profile, app_settings, current_logger, input_func
    ).collect()


def print_banner(
    identity: OSIdentity,
    wings_version: str,
    script_release: str,
) -> None:
    print_brake()
    print(f"* Pterodactyl Wings installation script @ {script_release}")
    print("*")
    print("* This script is not associated with the official Pterodactyl Project.")
    print("*")
    print(f"* Running {identity.distro_id} version {identity.version}.")
    print(f"* Latest pterodactyl/wings is {wings_version or 'unknown'}")
    print_brake()


def print_install_notes() -> None:
    print("* ")
    print("* The installer will install Docker, required dependencies for Wings")
    print("* as well as Wings itself. But it's still required to create the node")
    print("* on the panel and then place the configuration file on the node manually after")
    print("* the installation has finished. Read more about this process on the")
    print(f"* official documentation: {hyperlink(WINGS_DOCS_URL)}")
    print("* ")
    print("* Note: this script will not start Wings automatically (will install systemd service, not start it).")
    print("* Note: this script will not enable swap (for docker).")
    print_brake(42)


def print_completion_summary(app_settings: AppSettings) -> None:
    """Print the follow-up steps the operator has to perform by hand."""
    ports = " and ".join(str(p) for p in DAEMON_PORTS[1:])
    print("")
    print_brake()
    print("* Wings installation completed")
    print("*")
    print("* To continue, you need to configure Wings to run with your panel")
    print(f"* Please refer to the official guide, {hyperlink(WINGS_DOCS_URL)}")
    print("*")
    print(f"* Once the configuration has been created (usually in '{app_settings.config_dir}/config.yml')")
    print("* you can then start Wings manually to verify that it's working")
    print("*")
    print("* sudo wings")
    print("*")
    print("* Once you have verified that it is working, you can then start it as a service (runs in the background)")
    print("*")
    print("* systemctl start wings")
    print("*")
    print("* Note: It is recommended to enable swap (for Docker, read more about it in official documentation).")
    print(f"* Note: If you haven't configured your firewall, ports {ports} needs to be open.")
    print_brake()
    print("")
