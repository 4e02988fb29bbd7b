from .settings import Settings, get_settings, load_config_yaml

__all__ = ["Settings", "get_settings", "load_config_yaml"]
