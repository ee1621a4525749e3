"""Configuration module for the CIAM client."""
from .settings import CiamConfig, load_settings

__all__ = ["CiamConfig", "load_settings"]
