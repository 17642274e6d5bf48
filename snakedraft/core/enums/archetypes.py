"""Drafter archetypes and strategy-shift classification."""

from enum import Enum


class Archetype(Enum):
    """
    Named drafting-strategy biases assigned to non-human participants.

    HUMAN is a sentinel for the participant controlled by a person. It has
    no shift rule and is never flagged.
    """

    BALANCED = "balanced"
    BOLD = "bold"
    ZERO_RB = "zero-rb"
    QB_FIRST = "qb-first"
    STUD_RB = "stud-rb"
    VALUE_HUNTER = "value-hunter"
    STACK_BUILDER = "stack-builder"
    TE_PREMIUM = "te-premium"
    YOUTH_MOVEMENT = "youth-movement"
    CONTRARIAN = "contrarian"
    RISK_AVERSE = "risk-averse"
    REACTIVE = "reactive"
    HUMAN = "human"


class ShiftCategory(Enum):
    """How a pick deviated from its archetype."""

    STRATEGY_BREAK = "strategy-break"
    VALUE_DEVIATION = "value-deviation"
    TREND_FOLLOW = "trend-follow"
    TREND_FADE = "trend-fade"
    POSITIONAL_PIVOT = "positional-pivot"


class ShiftSeverity(Enum):
    """Severity of a detected shift."""

    MINOR = "minor"
    MAJOR = "major"


class DraftPhase(Enum):
    """Current phase of the draft."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
