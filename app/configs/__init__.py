from app.configs.settings import CONFIG_MAP, LimiterConfig, settings

__all__ = [
    "CONFIG_MAP",
    "LimiterConfig",
    "settings",
]
