"""
Snake draft ordering.

Odd rounds go 0 -> N-1, even rounds go N-1 -> 0, which balances each
team's average draft position across rounds.
"""

from typing import Optional

from snakedraft.core.models import CurrentPick, DraftSettings


def turn_for(pick_number: int, num_teams: int) -> tuple[int, int]:
    """
    Map an overall pick number to (round, team_index).

    Pick numbers start at 1. Round 1 is ascending, round 2 descending, etc.
    """
    if num_teams < 1:
        raise ValueError(f"num_teams must be positive, got {num_teams}")
    if pick_number < 1:
        raise ValueError(f"pick_number must be >= 1, got {pick_number}")

    round_num = (pick_number + num_teams - 1) // num_teams
    position_in_round = (pick_number - 1) % num_teams
    if round_num % 2 == 0:
        return round_num, num_teams - 1 - position_in_round
    return round_num, position_in_round


def pick_number_for(round_num: int, team_index: int, num_teams: int) -> int:
    """Inverse of turn_for: the overall pick a team makes in a round."""
    if round_num < 1 or not 0 <= team_index < num_teams:
        raise ValueError(f"Invalid round/team: round={round_num}, team={team_index}")

    if round_num % 2 == 0:
        position_in_round = num_teams - 1 - team_index
    else:
        position_in_round = team_index
    return (round_num - 1) * num_teams + position_in_round + 1


def total_picks(settings: DraftSettings) -> int:
    return settings.num_teams * settings.num_rounds


def cursor_for(pick_number: int, settings: DraftSettings) -> CurrentPick:
    """Build the turn cursor for a pick number."""
    round_num, team_index = turn_for(pick_number, settings.num_teams)
    return CurrentPick(
        pick_number=pick_number,
        round=round_num,
        team_index=team_index,
        is_human=team_index == settings.human_team_index,
    )


def next_cursor(cursor: CurrentPick, settings: DraftSettings) -> Optional[CurrentPick]:
    """Advance the cursor by one pick. None once the last pick is made."""
    if cursor.pick_number >= total_picks(settings):
        return None
    return cursor_for(cursor.pick_number + 1, settings)


def team_pick_numbers(team_index: int, settings: DraftSettings) -> list[int]:
    """All overall picks a team holds, in order."""
    return [
        pick_number_for(r, team_index, settings.num_teams)
        for r in range(1, settings.num_rounds + 1)
    ]
