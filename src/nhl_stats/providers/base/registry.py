from __future__ import annotations

from typing import Any

from nhl_stats.providers.base.errors import ProviderCapabilityError
from nhl_stats.reconcile.descriptors import EntityProfile
from nhl_stats.reconcile.queries import EntityKind


class SourceRegistry:
    """
    Static, read-only after startup: one EntityProfile per entity kind.
    Adding an upstream source means appending a descriptor to a profile,
    never touching the resolver.
    """

    def __init__(self) -> None:
        self._profiles: dict[EntityKind, EntityProfile[Any]] = {}

    def register(self, profile: EntityProfile[Any]) -> None:
        if profile.kind in self._profiles:
            raise ValueError(f"Duplicate source profile registration: {profile.kind}")
        self._profiles[profile.kind] = profile

    def get(self, kind: EntityKind) -> EntityProfile[Any]:
        profile = self._profiles.get(kind)
        if profile is None:
            raise ProviderCapabilityError(f"No sources registered for entity kind={kind}")
        return profile
