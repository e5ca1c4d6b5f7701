"""Configuration and logging helpers."""

from .config import Config, get_config, reset_config
from .logging import setup_logging

__all__ = ['Config', 'get_config', 'reset_config', 'setup_logging']
