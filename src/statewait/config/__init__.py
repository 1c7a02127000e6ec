"""Configuration: load waiter options from JSON and environment."""

from statewait.config.config_manager import load_options

__all__ = ["load_options"]
