"""Utility functions for configuration."""

from gravsim.utils.config import Config, load_config, save_config

__all__ = ["Config", "load_config", "save_config"]
