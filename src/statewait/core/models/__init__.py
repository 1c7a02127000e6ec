"""Pydantic models for waiter configuration."""
from statewait.core.models.options import WaiterOptions

__all__ = ["WaiterOptions"]
