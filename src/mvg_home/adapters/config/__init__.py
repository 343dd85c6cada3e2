"""Configuration adapters."""

from mvg_home.adapters.config.app_config import AppConfig, default_config_path, load_config

__all__ = ["AppConfig", "default_config_path", "load_config"]
