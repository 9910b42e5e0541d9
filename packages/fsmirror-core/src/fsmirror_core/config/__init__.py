from .loader import DEFAULT_CONFIG_TEMPLATE, configure_logging, load_config
from .models import MirrorConfig, ScannerConfig, UpdaterConfig

__all__ = [
    "DEFAULT_CONFIG_TEMPLATE",
    "MirrorConfig",
    "ScannerConfig",
    "UpdaterConfig",
    "configure_logging",
    "load_config",
]
