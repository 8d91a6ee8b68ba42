"""Star catalogue loading."""

from .hyg_loader import load_catalog

__all__ = ["load_catalog"]
