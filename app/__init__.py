"""
App Module - configuration and the top-level sky controller
"""
from .config import AppConfig
from .state_manager import AppState, SkyController

__all__ = ["AppConfig", "AppState", "SkyController"]
