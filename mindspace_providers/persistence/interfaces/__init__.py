"""Persistence contracts."""

from .repos import KeyStore

__all__ = ["KeyStore"]
