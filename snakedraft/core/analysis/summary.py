"""Per-team rollups of detected strategy shifts."""

from collections import Counter
from typing import Iterable

from snakedraft.core.models import Pick, StrategyShift, TeamShiftSummary


RECENT_TEAM_PICKS = 3


def summarize_shifts(
    shifts: Iterable[StrategyShift],
    picks: Iterable[Pick],
    num_teams: int,
) -> list[TeamShiftSummary]:
    """
    Summarize shifts for every team.

    The recent count covers each team's last three picks. Top category ties
    go to whichever category was seen first.
    """
    shifts = sorted(shifts, key=lambda s: s.pick_number)
    team_picks: dict[int, list[int]] = {i: [] for i in range(num_teams)}
    for pick in picks:
        team_picks.setdefault(pick.team_index, []).append(pick.pick_number)

    summaries = []
    for team_index in range(num_teams):
        team_shifts = [s for s in shifts if s.team_index == team_index]
        recent = set(sorted(team_picks.get(team_index, []))[-RECENT_TEAM_PICKS:])
        categories = Counter(s.category for s in team_shifts)

        summaries.append(TeamShiftSummary(
            team_index=team_index,
            total_shifts=len(team_shifts),
            last3_team_picks_shift_count=sum(1 for s in team_shifts if s.pick_number in recent),
            major_shift_count=sum(1 for s in team_shifts if s.is_major),
            top_category=categories.most_common(1)[0][0] if categories else None,
        ))
    return summaries
