"""
UI Module - input handling and the pygame sky chart
"""
from .interaction import InteractionController

__all__ = ["InteractionController"]
