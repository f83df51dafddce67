from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a building, sampler or controller is given invalid parameters."""


class UpgradeError(ValueError):
    """Raised when a controller cannot accept a rationality upgrade."""
