"""
Installer steps. Every module in this package registers its installer with
the InstallerRegistry when imported.
"""
