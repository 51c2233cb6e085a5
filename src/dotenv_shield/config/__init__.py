"""
Configuration
=============

Constants and layered tool settings.

Usage:
    from dotenv_shield.config import load_settings

    settings = load_settings()
    settings.schema_path
"""

from .settings import ShieldSettings, load_settings

__all__ = ["ShieldSettings", "load_settings"]
