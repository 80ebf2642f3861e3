from .settings import AppConfig, CloudglueConfig, LoggingConfig

__all__ = ["AppConfig", "CloudglueConfig", "LoggingConfig"]
