from .loader import ConfigError, load_config, validate_config
from .models import AdapterDecl, AppConfig, SourceConfig, WriterConfig

__all__ = [
    "AdapterDecl",
    "AppConfig",
    "ConfigError",
    "SourceConfig",
    "WriterConfig",
    "load_config",
    "validate_config",
]
