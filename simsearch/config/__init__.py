from simsearch.config.loader import DEFAULT_CONFIG_PATH, deep_merge, load_config, load_yaml
from simsearch.config.schema import PluginConfig, SimSearchConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "deep_merge",
    "load_config",
    "load_yaml",
    "PluginConfig",
    "SimSearchConfig",
]
