"""
Vitrina Core
============

Core utilities and shared functionality for Vitrina modules.
"""

from .config import Config, get_config_value
from .database import Database
from .localized import Localized
from .logging_service import LoggingService, logger

__all__ = ['Config', 'get_config_value', 'Database', 'Localized', 'LoggingService', 'logger']
