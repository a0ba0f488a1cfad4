from .plugin import CONFIG_PATH, build_plugin

__all__ = ["CONFIG_PATH", "build_plugin"]
