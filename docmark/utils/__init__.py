"""
Utility functions and helpers.
"""
from .logging_config import LoggingConfig
from .resource_loader import get_app_data_dir, get_config_dir, get_log_dir
from .settings import AppSettings
from .warning_manager import WarningManager, WarningType, warning_manager

__all__ = [
    'LoggingConfig',
    'get_app_data_dir',
    'get_config_dir',
    'get_log_dir',
    'AppSettings',
    'WarningManager',
    'WarningType',
    'warning_manager',
]
