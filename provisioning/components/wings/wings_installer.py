# provisioning/components/wings/wings_installer.py
# -*- coding: utf-8 -*-
"""
Downloads the Wings daemon binary.
"""

import os
import stat
from pathlib import Path

from common.command_utils import log_step
from common.network_utils import download_file
from provisioning.base_installer import BaseInstaller
from provisioning.registry import InstallerRegistry


@InstallerRegistry.register(
    name="wings",
    metadata={
        "dependencies": ["docker"],
        "description": "Pterodactyl Wings daemon binary",
    },
)
class WingsInstaller(BaseInstaller):

    def is_installed(self) -> bool:
        return Path(self.app_settings.wings_binary_path).is_file()

    def install(self) -> bool:
        config_dir = Path(self.app_settings.config_dir)
        binary_path = Path(self.app_settings.wings_binary_path)

        config_dir.mkdir(parents=True, exist_ok=True)
        download_file(
            self.app_settings.wings_download_url,
            binary_path,
            self.app_settings,
            self.logger,
        )
        # chmod u+x
        os.chmod(binary_path, binary_path.stat().st_mode | stat.S_IXUSR)

        log_step(
            f"{self.symbols.get('success', '')} Wings downloaded to {binary_path}",
            "success",
            self.logger,
            self.app_settings,
        )
        return True
