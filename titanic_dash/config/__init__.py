"""
Configuration layer: global.json -> GlobalConfig.
"""

from .model import ColumnMapping, DashboardConfig, GlobalConfig
from .loader import load_global_config

__all__ = ["ColumnMapping", "DashboardConfig", "GlobalConfig", "load_global_config"]
