"""Team roster configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import yaml

from yutnori.core import GameRules, TeamConfig

# (color, color_light, emoji) handed out in roster order when a team omits them.
TEAM_PALETTE: Tuple[Tuple[str, str, str], ...] = (
    ("#3b82f6", "#dbeafe", "🔵"),
    ("#ef4444", "#fee2e2", "🔴"),
    ("#22c55e", "#dcfce7", "🟢"),
    ("#eab308", "#fef9c3", "🟡"),
)

DEFAULT_TEAM_NAMES = ("청팀", "홍팀", "녹팀", "황팀")


def team_from_mapping(index: int, raw: Dict[str, Any]) -> TeamConfig:
    color, color_light, emoji = TEAM_PALETTE[index % len(TEAM_PALETTE)]
    return TeamConfig(
        id=str(raw.get("id", f"team{index}")),
        name=str(raw.get("name") or DEFAULT_TEAM_NAMES[index % len(DEFAULT_TEAM_NAMES)]),
        piece_count=int(raw.get("piece_count", 4)),
        color=raw.get("color", color),
        color_light=raw.get("color_light", color_light),
        emoji=raw.get("emoji", emoji),
    )


def default_roster(team_count: int = 2, piece_count: int = 4) -> Tuple[TeamConfig, ...]:
    return tuple(team_from_mapping(i, {"piece_count": piece_count}) for i in range(team_count))


def parse_roster(cfg: Dict[str, Any]) -> Tuple[Tuple[TeamConfig, ...], GameRules]:
    teams_cfg: List[Dict[str, Any]] = cfg.get("teams") or []
    if not teams_cfg:
        raise ValueError("Roster config must list at least one team under 'teams'.")
    teams = tuple(team_from_mapping(i, raw or {}) for i, raw in enumerate(teams_cfg))
    rules = GameRules(**(cfg.get("rules") or {}))
    return teams, rules


def load_team_roster(path: Union[str, Path]) -> Tuple[Tuple[TeamConfig, ...], GameRules]:
    """Read a YAML roster file (``teams:`` list plus optional ``rules:``)."""
    cfg = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    return parse_roster(cfg)
