# src/settings/__init__.py
"""
Datagen configuration (config/datagen.yaml -> DatagenConfig).
"""

from .loader import config_from_mapping, default_config, load_datagen_config
from .schema import DatagenConfig, IncreasedYieldConfig, KindConfig

__all__ = [
    "DatagenConfig",
    "IncreasedYieldConfig",
    "KindConfig",
    "config_from_mapping",
    "default_config",
    "load_datagen_config",
]
