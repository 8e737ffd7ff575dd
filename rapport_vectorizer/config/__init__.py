"""Configuration module -- exports Settings and the startup validation helper."""

from rapport_vectorizer.config.settings import Settings, load_settings, validate_settings

__all__ = ["Settings", "load_settings", "validate_settings"]
