"""
Configuration loading.
"""

from schedule_hours.config.manager import ConfigManager

__all__ = ["ConfigManager"]
