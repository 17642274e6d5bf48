"""
Roster slot eligibility.

A position can be drafted iff its dedicated slot is open or SUPERFLEX is
open. Dedicated slots are preferred when assigning.
"""

from typing import Iterable, Optional

from snakedraft.core.enums import ALL_POSITIONS, POSITION_SLOTS, Position, RosterSlot
from snakedraft.core.models import Player, Roster


def can_accept(roster: Roster, position: Position) -> bool:
    """Check if a position can fill one of the roster's open slots."""
    if roster.is_open(POSITION_SLOTS[position]):
        return True
    return roster.is_open(RosterSlot.SUPERFLEX)


def eligible_categories(roster: Roster) -> set[Position]:
    """Positions the roster can still legally accept."""
    if roster.is_open(RosterSlot.SUPERFLEX):
        return set(ALL_POSITIONS)
    return {pos for pos in ALL_POSITIONS if roster.is_open(POSITION_SLOTS[pos])}


def assign_slot(roster: Roster, position: Position) -> Optional[RosterSlot]:
    """
    Determine which slot a pick at this position fills.

    Returns None if nothing is open. Callers should check can_accept first.
    """
    dedicated = POSITION_SLOTS[position]
    if roster.is_open(dedicated):
        return dedicated
    if roster.is_open(RosterSlot.SUPERFLEX):
        return RosterSlot.SUPERFLEX
    return None


def available_slots(roster: Roster) -> list[RosterSlot]:
    """Open roster slots, in slot order."""
    return [slot for slot in RosterSlot if roster.is_open(slot)]


def eligible_players(roster: Roster, players: Iterable[Player]) -> list[Player]:
    """Players the roster could legally draft, preserving input order."""
    return [p for p in players if can_accept(roster, p.position)]
