# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing shell commands and logging their output.

Every command the installer runs goes through `run_command`, which logs the
command line before running it and its captured output afterwards.
"""

import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional, Sequence, Union

from wings_setup.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)

_LOG_METHODS = ("debug", "info", "warning", "error", "critical")


def log_step(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs an installer message at the given level.

    Args:
        message (str): The log message to be recorded.
        level (str): "debug", "info", "success", "warning", "error" or
            "critical". "success" and unknown levels are logged at INFO.
        current_logger (Optional[logging.Logger]): Logger to use; the
            module logger when omitted.
        app_settings (Optional[AppSettings]): Accepted so every helper can
            be called the same way; not used for routing.
        exc_info (bool): Attach the current exception to the record.
    """
    effective_logger = current_logger if current_logger else module_logger
    method = level if level in _LOG_METHODS else "info"
    getattr(effective_logger, method)(message, exc_info=exc_info)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    return (
        app_settings.symbols
        if app_settings and app_settings.symbols
        else SYMBOLS_DEFAULT
    )


def _get_elevated_command_prefix() -> List[str]:
    """
    Returns ["sudo"] unless the process already runs as root.

    The entry point refuses to start without root, so inside the installer
    this is always empty; it only matters when the helpers are used on
    their own.
    """
    return [] if os.geteuid() == 0 else ["sudo"]


def _format_command(command: Union[Sequence[str], str]) -> str:
    if isinstance(command, str):
        return command
    return subprocess.list2cmdline(list(command))


def _log_streams(
    stdout: Optional[str],
    stderr: Optional[str],
    level: str,
    effective_logger: logging.Logger,
    app_settings: Optional[AppSettings],
) -> None:
    for label, stream in (("stdout", stdout), ("stderr", stderr)):
        if isinstance(stream, str) and stream.strip():
            log_step(f"   {label}: {stream.strip()}", level, effective_logger, app_settings)


def run_command(
    command: Union[List[str], str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    shell: bool = False,
    capture_output: bool = False,
    text: bool = True,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a system command and logs the process details and results.

    Args:
        command (Union[List[str], str]): The command to execute. A string
            without shell=True is split on whitespace.
        app_settings (Optional[AppSettings]): Settings providing logging symbols.
        check (bool): Raise CalledProcessError on a non-zero exit code.
        shell (bool): Run the command through the shell.
        capture_output (bool): Capture stdout and stderr.
        text (bool): Decode the output streams as text.
        cmd_input (Optional[str]): Data passed to the command's stdin.
        current_logger (Optional[logging.Logger]): Logger to use.
        cwd (Optional[str]): Working directory for the command.
        env (Optional[Dict[str, str]]): Environment for the command; inherits
            the current environment when None.

    Returns:
        subprocess.CompletedProcess: The completed process.

    Raises:
        subprocess.CalledProcessError: On a non-zero exit code when check is True.
        FileNotFoundError: If the executable is not found.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    command_to_run: Union[List[str], str] = command
    if shell and not isinstance(command, str):
        command_to_run = " ".join(command)
    elif not shell and isinstance(command, str):
        command_to_run = command.split()

    location = f" (in {cwd})" if cwd else ""
    log_step(
        f"{symbols.get('gear', '⚙️')} Executing: {_format_command(command)}{location}",
        "info",
        effective_logger,
        app_settings,
    )

    try:
        result = subprocess.run(
            command_to_run,
            check=check,
            shell=shell,
            capture_output=capture_output,
            text=text,
            input=cmd_input,
            cwd=cwd,
            env=env,
        )
    except subprocess.CalledProcessError as e:
        log_step(
            f"{symbols.get('error', '❌')} Command `{_format_command(e.cmd)}` failed (rc {e.returncode}).",
            "error",
            effective_logger,
            app_settings,
        )
        _log_streams(e.stdout, e.stderr, "error", effective_logger, app_settings)
        raise
    except FileNotFoundError as e:
        log_step(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        raise

    if capture_output:
        _log_streams(result.stdout, result.stderr, "info", effective_logger, app_settings)
    return result


def run_elevated_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    cwd: Optional[str] = None,
    env: Optional[Dict[str, str]] = None,
) -> subprocess.CompletedProcess:
    """
    Executes a command with root privileges, prefixing it with sudo when the
    process is not already root.
    """
    return run_command(
        _get_elevated_command_prefix() + list(command),
        app_settings,
        check=check,
        capture_output=capture_output,
        cmd_input=cmd_input,
        current_logger=current_logger,
        cwd=cwd,
        env=env,
    )


def command_exists(command_name: str) -> bool:
    return shutil.which(command_name) is not None
