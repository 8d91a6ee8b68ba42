
class SkymapError(Exception):
    """Base class for star map errors."""


class CatalogError(SkymapError):
    """Star catalog could not be read or lacks required columns."""


class ConfigError(SkymapError):
    """Invalid configuration value."""
