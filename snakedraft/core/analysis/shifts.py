"""
Strategy Shift Detection.

Judges whether a committed pick is out of character for the archetype
that made it. Each archetype registers one rule; a rule is a short
sequence of checks that returns a ShiftDetection or None.

Before any rule runs, board signals and alternatives are restricted to
what the roster could legally draft. A team is never faulted for passing
on a player it had no slot for, and a forced pick (only one position
eligible) is never a shift.

Terms used by the rules:
- value = pick_number - rank  (positive = player fell to us)
- reach = rank - pick_number  (positive = taken ahead of rank)
- gap   = top eligible drop's value - picked value
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from snakedraft.core.analysis.board import (
    BoardAnalysis,
    PositionRun,
    ScarcityAlert,
    ValueDrop,
)
from snakedraft.core.draft.roster import eligible_players
from snakedraft.core.enums import Archetype, Position, ShiftCategory, ShiftSeverity
from snakedraft.core.models import Pick, Player, Roster, ShiftDetection


# One-pick value pivot: picking this much more value than the best
# in-strategy option downgrades a core break to a minor value deviation
STRONG_VALUE_PIVOT_EDGE = 8

BALANCED_MINOR_REACH_THRESHOLD = 10
BALANCED_MAJOR_REACH_THRESHOLD = 14
BALANCED_MINOR_DROP_THRESHOLD = 10
BALANCED_MAJOR_DROP_THRESHOLD = 14
BALANCED_MINOR_DROP_GAP = 5
BALANCED_MAJOR_DROP_GAP = 8

BOLD_MAX_ROUND = 3
BOLD_VETERAN_AGE = 29
BOLD_OLD_AGE = 31
BOLD_DISCOUNT_VALUE = 8
BOLD_MAJOR_DISCOUNT_VALUE = 4

STACK_BUILDER_MAX_ROUND = 2
STACK_BUILDER_ELITE_QB_RANK = 18
ZERO_RB_MAX_ROUND = 3
QB_FIRST_MAX_ROUND = 2
STUD_RB_ROUND = 1
TE_PREMIUM_MAX_ROUND = 2
TE_PREMIUM_ELITE_TIER = 2

CONTRARIAN_ACTIVE_RUN_COUNT = 4
CONTRARIAN_MIN_WINDOW = 6
CONTRARIAN_RUN_SHARE = 0.5
CONTRARIAN_MAJOR_RUN_COUNT = 5

YOUTH_YOUNG_AGE = 28
YOUTH_MINOR_AGE = 28
YOUTH_MAJOR_AGE = 30

RISK_AVERSE_MINOR_REACH_THRESHOLD = 8
RISK_AVERSE_MAJOR_REACH_THRESHOLD = 12

VALUE_HUNTER_MINOR_NEGATIVE_VALUE = -4
VALUE_HUNTER_MAJOR_NEGATIVE_VALUE = -8
VALUE_HUNTER_MINOR_DROP_THRESHOLD = 8
VALUE_HUNTER_MAJOR_DROP_THRESHOLD = 10
VALUE_HUNTER_MINOR_DROP_GAP = 3
VALUE_HUNTER_MAJOR_DROP_GAP = 5

REACTIVE_DOMINANT_RUN_COUNT = 4
REACTIVE_MAJOR_DROP = 10
REACTIVE_MINOR_DROP = 8
REACTIVE_MAJOR_DROP_GAP = 6
REACTIVE_MINOR_DROP_GAP = 3
REACTIVE_URGENT_SCARCITY = 3


@dataclass(frozen=True)
class ShiftContext:
    """What the roster on the clock could legally draft before the pick."""
    eligible_players: tuple[Player, ...]
    eligible_positions: frozenset[Position]
    forced_position: Optional[Position]


def build_shift_context(roster: Roster, available: Iterable[Player]) -> ShiftContext:
    """Restrict the pre-pick pool to what the roster can accept."""
    players = tuple(eligible_players(roster, available))
    positions = frozenset(p.position for p in players)
    forced = next(iter(positions)) if len(positions) == 1 else None
    return ShiftContext(
        eligible_players=players,
        eligible_positions=positions,
        forced_position=forced,
    )


@dataclass(frozen=True)
class PickEvaluation:
    """Everything a rule needs to judge one pick."""
    pick: Pick
    picked_player: Optional[Player]
    analysis: BoardAnalysis
    eligible_players: tuple[Player, ...]
    eligible_positions: frozenset[Position]
    eligible_runs: tuple[PositionRun, ...]
    eligible_scarcity: tuple[ScarcityAlert, ...]

    @property
    def picked_value(self) -> Optional[int]:
        if self.picked_player is None:
            return None
        return self.picked_player.value_at(self.pick.pick_number)

    @property
    def picked_reach(self) -> Optional[int]:
        if self.picked_player is None:
            return None
        return -self.picked_player.value_at(self.pick.pick_number)

    def top_eligible_drop(self) -> Optional[ValueDrop]:
        for drop in self.analysis.value_drops:
            if drop.player.position in self.eligible_positions:
                return drop
        return None

    def passed_drop(self) -> Optional[ValueDrop]:
        """Top eligible value drop, if the pick was someone else."""
        drop = self.top_eligible_drop()
        if drop is None or drop.player.player_id == self.pick.player_id:
            return None
        return drop


ShiftRule = Callable[[PickEvaluation], Optional[ShiftDetection]]

# Archetype name -> rule. Unregistered archetypes are never flagged.
SHIFT_RULES: dict[str, ShiftRule] = {}


def shift_rule(archetype: Archetype) -> Callable[[ShiftRule], ShiftRule]:
    """Register a rule for an archetype."""
    def decorator(func: ShiftRule) -> ShiftRule:
        SHIFT_RULES[archetype.value] = func
        return func
    return decorator


def _shift(trigger: str, category: ShiftCategory, major: bool) -> ShiftDetection:
    return ShiftDetection(
        trigger=trigger,
        category=category,
        severity=ShiftSeverity.MAJOR if major else ShiftSeverity.MINOR,
    )


def _best_value(pick_number: int, players: Iterable[Player]) -> Optional[Player]:
    best = None
    for player in players:
        if best is None or player.value_at(pick_number) > best.value_at(pick_number):
            best = player
    return best


def classify_core_strategy_break(
    label: str,
    ev: PickEvaluation,
    preferred: list[Player],
    preferred_label: str,
    major_category: ShiftCategory = ShiftCategory.STRATEGY_BREAK,
) -> Optional[ShiftDetection]:
    """
    Judge a pick that skipped the archetype's preferred option.

    A big enough value edge over the best in-strategy option is a minor
    value pivot; anything else is a major break.
    """
    pick = ev.pick
    best = _best_value(pick.pick_number, preferred)
    if best is None:
        return None

    picked_value = ev.picked_value
    if picked_value is not None:
        edge = picked_value - best.value_at(pick.pick_number)
        if edge >= STRONG_VALUE_PIVOT_EDGE:
            return _shift(
                f"{label} persona made a one-pick value pivot: drafted {pick.player_name} "
                f"({pick.position.value}) over in-strategy {preferred_label} option "
                f"{best.name} with a +{edge} value edge.",
                ShiftCategory.VALUE_DEVIATION,
                major=False,
            )

    return _shift(
        f"{label} persona broke its core strategy by drafting {pick.player_name} "
        f"({pick.position.value}) while viable {preferred_label} option {best.name} "
        "was available.",
        major_category,
        major=True,
    )


@shift_rule(Archetype.BALANCED)
def _balanced(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """Balanced should not make extreme reaches or pass obvious value."""
    pick = ev.pick
    reach = ev.picked_reach
    if reach is not None and reach >= BALANCED_MINOR_REACH_THRESHOLD:
        major = reach >= BALANCED_MAJOR_REACH_THRESHOLD
        if major:
            trigger = (
                f"Balanced persona made an aggressive reach for {pick.player_name} "
                f"({reach} spots ahead of rank), deviating from BPA principles."
            )
        else:
            trigger = (
                f"Balanced persona slightly reached for {pick.player_name} "
                f"({reach} spots ahead of rank), nudging away from BPA discipline."
            )
        return _shift(trigger, ShiftCategory.VALUE_DEVIATION, major)

    drop = ev.passed_drop()
    if drop is None or ev.picked_value is None:
        return None

    gap = drop.adp_diff - ev.picked_value
    if drop.adp_diff >= BALANCED_MAJOR_DROP_THRESHOLD and gap >= BALANCED_MAJOR_DROP_GAP:
        return _shift(
            f"Balanced persona passed on a major eligible value drop ({drop.player.name}, "
            f"+{drop.adp_diff}) to draft {pick.player_name} with clearly lower value.",
            ShiftCategory.VALUE_DEVIATION,
            major=True,
        )
    if drop.adp_diff >= BALANCED_MINOR_DROP_THRESHOLD and gap >= BALANCED_MINOR_DROP_GAP:
        return _shift(
            f"Balanced persona bypassed an eligible value pocket ({drop.player.name}, "
            f"+{drop.adp_diff}) for {pick.player_name}, signaling a light tactical pivot.",
            ShiftCategory.VALUE_DEVIATION,
            major=False,
        )
    return None


@shift_rule(Archetype.BOLD)
def _bold(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """Bold should lean into upside over older, safer profiles."""
    player = ev.picked_player
    if player is None or ev.pick.round > BOLD_MAX_ROUND:
        return None

    value = ev.picked_value or 0
    if player.age < BOLD_VETERAN_AGE or value >= BOLD_DISCOUNT_VALUE:
        return None
    if not any(p.age < BOLD_VETERAN_AGE for p in ev.eligible_players):
        return None

    return _shift(
        f"Bold persona drafted older, safer profile {ev.pick.player_name} "
        f"(age {player.age}) without a major value discount.",
        ShiftCategory.STRATEGY_BREAK,
        major=player.age >= BOLD_OLD_AGE and value < BOLD_MAJOR_DISCOUNT_VALUE,
    )


@shift_rule(Archetype.STACK_BUILDER)
def _stack_builder(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """Stack-builder should secure a QB anchor early while elite QBs remain."""
    if ev.pick.position == Position.QB or ev.pick.round > STACK_BUILDER_MAX_ROUND:
        return None
    elite_qbs = [
        p for p in ev.eligible_players
        if p.position == Position.QB and p.rank <= STACK_BUILDER_ELITE_QB_RANK
    ]
    return classify_core_strategy_break(
        "Stack-builder", ev, elite_qbs, "elite QB", ShiftCategory.POSITIONAL_PIVOT
    )


@shift_rule(Archetype.ZERO_RB)
def _zero_rb(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """Zero-RB should avoid RBs in the early rounds."""
    if ev.pick.position != Position.RB or ev.pick.round > ZERO_RB_MAX_ROUND:
        return None
    non_rbs = [p for p in ev.eligible_players if p.position != Position.RB]
    return classify_core_strategy_break("Zero-RB", ev, non_rbs, "non-RB")


@shift_rule(Archetype.QB_FIRST)
def _qb_first(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """QB-first should take QBs early when available."""
    if ev.pick.position == Position.QB or ev.pick.round > QB_FIRST_MAX_ROUND:
        return None
    qbs = [p for p in ev.eligible_players if p.position == Position.QB]
    return classify_core_strategy_break("QB-first", ev, qbs, "QB")


@shift_rule(Archetype.STUD_RB)
def _stud_rb(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """Stud-RB should open with an RB."""
    if ev.pick.position == Position.RB or ev.pick.round != STUD_RB_ROUND:
        return None
    rbs = [p for p in ev.eligible_players if p.position == Position.RB]
    return classify_core_strategy_break("Stud-RB", ev, rbs, "RB")


@shift_rule(Archetype.TE_PREMIUM)
def _te_premium(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """TE-premium should grab an elite TE early."""
    if ev.pick.position == Position.TE or ev.pick.round > TE_PREMIUM_MAX_ROUND:
        return None
    elite_tes = [
        p for p in ev.eligible_players
        if p.position == Position.TE and p.tier <= TE_PREMIUM_ELITE_TIER
    ]
    return classify_core_strategy_break("TE-premium", ev, elite_tes, "elite TE")


@shift_rule(Archetype.CONTRARIAN)
def _contrarian(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """Contrarian should go against position runs, not join them."""
    position = ev.pick.position
    joined = next(
        (
            run for run in ev.eligible_runs
            if run.position == position and (
                run.count >= CONTRARIAN_ACTIVE_RUN_COUNT
                or (
                    run.window >= CONTRARIAN_MIN_WINDOW
                    and run.count / run.window >= CONTRARIAN_RUN_SHARE
                )
            )
        ),
        None,
    )
    if joined is None:
        return None
    if not any(p.position != position for p in ev.eligible_players):
        return None

    return _shift(
        f"Contrarian joined a {position.value} run ({joined.count} of last "
        f"{joined.window} picks) instead of going against the grain.",
        ShiftCategory.TREND_FOLLOW,
        major=joined.count >= CONTRARIAN_MAJOR_RUN_COUNT,
    )


@shift_rule(Archetype.YOUTH_MOVEMENT)
def _youth_movement(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """Youth movement should avoid older players."""
    player = ev.picked_player
    if player is None:
        return None
    if not any(p.age < YOUTH_YOUNG_AGE for p in ev.eligible_players):
        return None

    if player.age >= YOUTH_MAJOR_AGE:
        return _shift(
            f"Youth-movement persona drafted {ev.pick.player_name} (age {player.age}), "
            "breaking their preference for young players.",
            ShiftCategory.STRATEGY_BREAK,
            major=True,
        )
    if player.age >= YOUTH_MINOR_AGE:
        return _shift(
            f"Youth-movement persona drafted {ev.pick.player_name} (age {player.age}), "
            "a mild departure from its youth-first bias.",
            ShiftCategory.STRATEGY_BREAK,
            major=False,
        )
    return None


@shift_rule(Archetype.RISK_AVERSE)
def _risk_averse(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """Risk-averse should not reach far past rank."""
    reach = ev.picked_reach
    if reach is None:
        return None

    pick = ev.pick
    if reach > RISK_AVERSE_MAJOR_REACH_THRESHOLD:
        return _shift(
            f"Risk-averse persona reached for {pick.player_name} (Rank "
            f"{ev.picked_player.rank} at pick {pick.pick_number}, a {reach}-spot reach).",
            ShiftCategory.VALUE_DEVIATION,
            major=True,
        )
    if reach > RISK_AVERSE_MINOR_REACH_THRESHOLD:
        return _shift(
            f"Risk-averse persona made a moderate reach for {pick.player_name} "
            f"({reach} spots ahead of rank), slightly increasing volatility.",
            ShiftCategory.VALUE_DEVIATION,
            major=False,
        )
    return None


@shift_rule(Archetype.VALUE_HUNTER)
def _value_hunter(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """Value hunter should take the biggest drop, never reach."""
    player = ev.picked_player
    if player is None:
        return None

    pick = ev.pick
    value = ev.picked_value
    if value < VALUE_HUNTER_MAJOR_NEGATIVE_VALUE:
        return _shift(
            f"Value-hunter reached for {pick.player_name} (Rank {player.rank} at pick "
            f"{pick.pick_number}, negative value).",
            ShiftCategory.VALUE_DEVIATION,
            major=True,
        )
    if value < VALUE_HUNTER_MINOR_NEGATIVE_VALUE:
        return _shift(
            f"Value-hunter took {pick.player_name} at slight negative value (Rank "
            f"{player.rank} at pick {pick.pick_number}), a softer deviation from "
            "value-first behavior.",
            ShiftCategory.VALUE_DEVIATION,
            major=False,
        )

    drop = ev.passed_drop()
    if drop is None:
        return None

    gap = drop.adp_diff - value
    if drop.adp_diff >= VALUE_HUNTER_MAJOR_DROP_THRESHOLD and gap >= VALUE_HUNTER_MAJOR_DROP_GAP:
        return _shift(
            f"Value-hunter passed on top eligible value drop {drop.player.name} "
            f"(+{drop.adp_diff}) for a lower-value option.",
            ShiftCategory.VALUE_DEVIATION,
            major=True,
        )
    if drop.adp_diff >= VALUE_HUNTER_MINOR_DROP_THRESHOLD and gap >= VALUE_HUNTER_MINOR_DROP_GAP:
        return _shift(
            f"Value-hunter bypassed eligible drop {drop.player.name} (+{drop.adp_diff}) "
            "and made a minor tactical pivot.",
            ShiftCategory.VALUE_DEVIATION,
            major=False,
        )
    return None


@shift_rule(Archetype.REACTIVE)
def _reactive(ev: PickEvaluation) -> Optional[ShiftDetection]:
    """
    Reactive normally follows the board. A shift is when it doesn't:
    ignoring a dominant run, a big value drop, or urgent scarcity.
    """
    pick = ev.pick
    position = pick.position

    runs = sorted(ev.eligible_runs, key=lambda r: r.count, reverse=True)
    dominant = runs[0] if runs else None
    runner_up = runs[1] if len(runs) > 1 else None
    has_dominant_run = (
        dominant is not None
        and dominant.count >= REACTIVE_DOMINANT_RUN_COUNT
        and (runner_up is None or dominant.count > runner_up.count)
    )

    if has_dominant_run and dominant.position != position:
        return _shift(
            f"Reactive persona ignored a dominant {dominant.position.value} run "
            f"({dominant.count} of last {dominant.window} picks) and drafted "
            f"{pick.player_name} ({position.value}).",
            ShiftCategory.TREND_FADE,
            major=True,
        )
    if has_dominant_run:
        return None

    top_drop = ev.top_eligible_drop()
    has_major_drop = top_drop is not None and top_drop.adp_diff >= REACTIVE_MAJOR_DROP
    has_minor_drop = top_drop is not None and top_drop.adp_diff >= REACTIVE_MINOR_DROP

    if has_minor_drop and top_drop.player.player_id != pick.player_id:
        passed = (
            f"Reactive persona passed on {top_drop.player.name} "
            f"({top_drop.player.position.value}, fallen {top_drop.adp_diff} spots) "
            f"to draft {pick.player_name} instead."
        )
        if ev.picked_value is None:
            return _shift(passed, ShiftCategory.VALUE_DEVIATION, major=has_major_drop)

        gap = top_drop.adp_diff - ev.picked_value
        if has_major_drop and gap >= REACTIVE_MAJOR_DROP_GAP:
            return _shift(passed, ShiftCategory.VALUE_DEVIATION, major=True)
        if gap >= REACTIVE_MINOR_DROP_GAP:
            return _shift(
                f"Reactive persona faded an eligible value signal ({top_drop.player.name}, "
                f"+{top_drop.adp_diff}) for {pick.player_name}.",
                ShiftCategory.VALUE_DEVIATION,
                major=False,
            )

    if has_minor_drop:
        return None

    urgent = [s for s in ev.eligible_scarcity if s.remaining <= REACTIVE_URGENT_SCARCITY]
    scarce_positions = [s.position for s in urgent]
    if urgent and position not in scarce_positions:
        names = ", ".join(p.value for p in scarce_positions)
        return _shift(
            f"Reactive persona ignored scarcity alerts at {names} and drafted "
            f"{pick.player_name} ({position.value}).",
            ShiftCategory.TREND_FADE,
            major=len(urgent) > 1,
        )
    return None


def detect_persona_shift(
    persona: Optional[str],
    pick: Pick,
    analysis: BoardAnalysis,
    available: list[Player],
    context: Optional[ShiftContext] = None,
) -> Optional[ShiftDetection]:
    """
    Detect whether a pick deviates from its persona's expected behavior.

    `analysis` and `available` must describe the board before the pick.
    Without a context, every available player counts as an alternative.
    """
    rule = SHIFT_RULES.get(persona or "")
    if rule is None:
        return None

    if context is None:
        positions = frozenset(p.position for p in available)
        context = ShiftContext(
            eligible_players=tuple(available),
            eligible_positions=positions,
            forced_position=next(iter(positions)) if len(positions) == 1 else None,
        )

    # Forced pick: there was no choice to make
    if context.forced_position is not None:
        return None

    positions = context.eligible_positions
    ev = PickEvaluation(
        pick=pick,
        picked_player=next((p for p in available if p.player_id == pick.player_id), None),
        analysis=analysis,
        eligible_players=context.eligible_players,
        eligible_positions=positions,
        eligible_runs=tuple(r for r in analysis.position_runs if r.position in positions),
        eligible_scarcity=tuple(s for s in analysis.scarcity if s.position in positions),
    )
    return rule(ev)
