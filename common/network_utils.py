# common/network_utils.py
# -*- coding: utf-8 -*-
"""
Network-related utility functions: release lookups and file downloads.
"""
import logging
from pathlib import Path
from typing import Optional, Union

import requests

from wings_setup.config_models import AppSettings
from .command_utils import get_symbols, log_step

module_logger = logging.getLogger(__name__)


def get_latest_release(
    repository: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Look up the tag name of the latest release of `repository` (owner/repo).

    Any HTTP, network or decoding problem yields an empty string; the daemon
    download URL does not depend on the version.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    url = f"{app_settings.github_api_url.rstrip('/')}/repos/{repository}/releases/latest"

    try:
        response = requests.get(
            url,
            headers={"Accept": "application/vnd.github+json"},
            timeout=app_settings.request_timeout,
        )
        response.raise_for_status()
        payload = response.json()
    except requests.exceptions.RequestException as e:
        log_step(
            f"{symbols.get('warning', '!')} Could not retrieve release information for {repository}: {e}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return ""
    except ValueError as e:
        log_step(
            f"{symbols.get('warning', '!')} Release information for {repository} is not valid JSON: {e}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return ""

    tag_name = payload.get("tag_name") if isinstance(payload, dict) else None
    if not isinstance(tag_name, str):
        log_step(
            f"{symbols.get('warning', '!')} Release information for {repository} has no tag name.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return ""
    return tag_name


def download_file(
    url: str,
    destination: Union[str, Path],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> Path:
    """
    Stream `url` to `destination`, following redirects.

    Raises:
        requests.exceptions.RequestException: On HTTP or network errors.
        OSError: If the destination cannot be written.
    """
    logger_to_use = current_logger if current_logger else module_logger
    destination_path = Path(destination)
    log_step(
        f"{get_symbols(app_settings).get('package', '')} Downloading {url} to {destination_path}",
        "info",
        logger_to_use,
        app_settings,
    )
    destination_path.parent.mkdir(parents=True, exist_ok=True)

    with requests.get(
        url, stream=True, timeout=app_settings.request_timeout
    ) as response:
        response.raise_for_status()
        with open(destination_path, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    f.write(chunk)
    return destination_path


def fetch_text(
    url: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Fetch a small text resource such as a signing key or a setup script.

    Raises:
        requests.exceptions.RequestException: On HTTP or network errors.
    """
    logger_to_use = current_logger if current_logger else module_logger
    log_step(f"Fetching {url}", "debug", logger_to_use, app_settings)
    response = requests.get(url, timeout=app_settings.request_timeout)
    response.raise_for_status()
    return response.text
