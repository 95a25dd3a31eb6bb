# src/pocketscholar/configuration/providers/__init__.py
"""Provider configurations for PocketScholar."""

from pocketscholar.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
