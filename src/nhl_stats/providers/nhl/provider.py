from __future__ import annotations

from nhl_stats.providers.base.client import BaseHttpClient, NhlHttpClient
from nhl_stats.providers.base.registry import SourceRegistry
from nhl_stats.providers.nhl.leaders import GOALIE_LEADERS_PROFILE, SKATER_LEADERS_PROFILE
from nhl_stats.providers.nhl.player import PLAYER_PROFILE
from nhl_stats.providers.nhl.roster import ROSTER_PROFILE
from nhl_stats.providers.nhl.schedule import SCHEDULE_PROFILE
from nhl_stats.providers.nhl.standings import STANDINGS_PROFILE
from nhl_stats.providers.nhl.team import TEAM_PROFILE


def register_nhl_sources(registry: SourceRegistry) -> None:
    registry.register(TEAM_PROFILE)
    registry.register(PLAYER_PROFILE)
    registry.register(STANDINGS_PROFILE)
    registry.register(ROSTER_PROFILE)
    registry.register(SKATER_LEADERS_PROFILE)
    registry.register(GOALIE_LEADERS_PROFILE)
    registry.register(SCHEDULE_PROFILE)


def build_registry() -> SourceRegistry:
    registry = SourceRegistry()
    register_nhl_sources(registry)
    return registry


def make_fetcher(
    *,
    user_agent: str,
    timeout_s: float = 30.0,
    connect_timeout_s: float = 10.0,
    transport=None,
) -> NhlHttpClient:
    http = BaseHttpClient(
        timeout_s=timeout_s,
        connect_timeout_s=connect_timeout_s,
        transport=transport,
    )
    return NhlHttpClient(http=http, user_agent=user_agent)
