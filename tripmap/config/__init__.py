"""Runtime configuration helpers."""

from tripmap.config.settings import ProviderSnapshot, resolve_provider_snapshot

__all__ = ["ProviderSnapshot", "resolve_provider_snapshot"]
