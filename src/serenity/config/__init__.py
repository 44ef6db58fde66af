"""
Serenity Configuration Module

Environment-based settings loading with validation.
"""

from serenity.config.settings import AuditSettings, DetectionSettings, Settings, get_settings

__all__ = ["AuditSettings", "DetectionSettings", "Settings", "get_settings"]
