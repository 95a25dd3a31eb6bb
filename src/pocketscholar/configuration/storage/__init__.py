# src/pocketscholar/configuration/storage/__init__.py
"""Storage configurations for PocketScholar."""

from pocketscholar.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]
