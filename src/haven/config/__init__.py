"""
HAVEN Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of detection thresholds and windows
"""

from haven.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
