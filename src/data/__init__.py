"""Data sources for staked token contracts and price feeds."""

from src.data.provider_factory import create_sources

__all__ = ["create_sources"]
