# !/usr/bin/env python3
# filename: install_wings.py
# -*- coding: utf-8 -*-
"""
Entry point for the Pterodactyl Wings installer.

Runs the preflight checks, probes the operating system, gates on
compatibility, collects the operator's options and hands them to the
installer orchestrator.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from common.command_utils import command_exists, log_step
from common.core_utils import setup_logging
from common.network_utils import get_latest_release
from common.system_utils import detect_distro, is_root
from provisioning.orchestrator import InstallerOrchestrator
from wings_setup.cli_handler import (
    InputFunc,
    cli_prompt_yes_no,
    collect_install_options,
    print_banner,
    print_completion_summary,
    print_install_notes,
)
from wings_setup.compatibility import run_compatibility_gate
from wings_setup.config_loader import load_app_settings
from wings_setup.config_models import AppSettings
from wings_setup.exceptions import (
    InstallationAborted,
    InsufficientPrivileges,
    MissingRequiredTool,
    WingsInstallerError,
)

SCRIPT_RELEASE = "canary"
REQUIRED_TOOLS = ("systemctl",)

logger = logging.getLogger("wings_installer")


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Interactive installer for the Pterodactyl Wings daemon"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config", default=None, help="Path to a YAML settings file"
    )
    parser.add_argument(
        "--log-file", default=None, help="Also append log records to this file"
    )
    parser.add_argument(
        "--log-prefix", default=None, help="Prefix for every log record"
    )
    parser.add_argument(
        "--request-timeout",
        type=int,
        default=None,
        help="Timeout in seconds for HTTP requests",
    )
    return parser.parse_args(args)


def check_preflight(app_settings: AppSettings, input_func: InputFunc = input) -> None:
    """
    Raises:
        InsufficientPrivileges: If not running as root.
        MissingRequiredTool: If a required command is not on PATH.
        InstallationAborted: If a previous installation exists and the
            operator does not want to continue.
    """
    if not is_root():
        raise InsufficientPrivileges("This script must be executed with root privileges (sudo).")

    for tool in REQUIRED_TOOLS:
        if not command_exists(tool):
            raise MissingRequiredTool(f"{tool} is required in order for this script to work.")

    if Path(app_settings.config_dir).is_dir():
        log_step(
            f"{app_settings.symbols.get('warning', '!')} The script has detected that you already have Pterodactyl wings on your system! You cannot run the script multiple times, it will fail!",
            "warning",
            logger,
            app_settings,
        )
        if not cli_prompt_yes_no(
            "Are you sure you want to proceed?", app_settings, logger, input_func
        ):
            raise InstallationAborted("Installation aborted!")


def run_installer(app_settings: AppSettings, input_func: InputFunc = input) -> List[str]:
    """
    Run the whole interactive installation.

    Returns:
        The names of the installer steps that ran.
    """
    check_preflight(app_settings, input_func)

    identity = detect_distro(app_settings, logger)
    wings_version = get_latest_release(app_settings.wings_repository, app_settings, logger)
    print_banner(identity, wings_version, SCRIPT_RELEASE)

    profile = run_compatibility_gate(
        identity,
        app_settings,
        lambda question: cli_prompt_yes_no(question, app_settings, logger, input_func),
        logger,
    )

    print_install_notes()
    install_config = collect_install_options(
        identity, profile, app_settings, logger, input_func
    )

    completed = InstallerOrchestrator(app_settings, profile, logger).install(install_config)
    print_completion_summary(app_settings)
    return completed


def main(args: Optional[List[str]] = None, input_func: InputFunc = input) -> int:
    """Main entry point for the Wings installer."""
    parsed_args = parse_args(args)

    app_settings = load_app_settings(parsed_args, parsed_args.config, logger)
    setup_logging(
        log_level=logging.DEBUG if parsed_args.verbose else logging.INFO,
        log_file=parsed_args.log_file,
        log_prefix=app_settings.log_prefix,
        symbols=app_settings.symbols,
    )

    try:
        run_installer(app_settings, input_func)
    except WingsInstallerError as e:
        level = "info" if e.exit_code == 0 else "error"
        symbol = app_settings.symbols.get("info" if e.exit_code == 0 else "error", "")
        log_step(f"{symbol} {e.message}", level, logger, app_settings)
        if e.recovery_hint:
            log_step(e.recovery_hint, level, logger, app_settings)
        return e.exit_code
    except KeyboardInterrupt:
        log_step("Installation interrupted.", "warning", logger, app_settings)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
