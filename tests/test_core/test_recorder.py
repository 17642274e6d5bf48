"""
Tests for the pick recorder.

Covers the commit protocol: fresh re-read, validation order, the version
guarded write, and what gets persisted and published on success.
"""

import asyncio

import pytest

from conftest import make_player
from snakedraft.core.draft import (
    PickProposal,
    PickRecorder,
    initial_state_items,
    load_snapshot,
)
from snakedraft.core.enums import DraftPhase, Position, ShiftCategory, ShiftSeverity
from snakedraft.core.errors import (
    DraftConflictError,
    DraftExhaustionError,
    DraftNotFoundError,
    DraftValidationError,
)
from snakedraft.core.models import DraftSettings, PersonaAssignment, Roster
from snakedraft.events import (
    DraftCompletedEvent,
    PickCommittedEvent,
    ShiftDetectedEvent,
)
from snakedraft.storage import InMemoryKeyValueStore
from snakedraft.storage.keys import board_key, reasoning_key, roster_key, shift_key


@pytest.fixture
def recorder(store, bus, config):
    return PickRecorder(store, bus, config)


@pytest.fixture
def events(bus):
    received = []
    bus.subscribe_all(received.append)
    return received


class TestCommit:
    """Successful commits."""

    def test_commit_advances_draft(self, store, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory()
            result = await recorder.commit(draft_id, PickProposal(1, 0, "p1", reasoning="Top QB"))
            return result, await load_snapshot(store, draft_id)

        result, fresh = asyncio.run(run())

        assert result.pick.player_id == "p1"
        assert result.pick.reasoning == "Top QB"
        assert result.message == "Team 1 selects Player 1 (QB) with pick #1."
        assert not result.draft_complete

        assert fresh.board.version == 1
        assert fresh.board.phase == DraftPhase.IN_PROGRESS
        assert fresh.board.current_pick.pick_number == 2
        assert fresh.board.current_pick.team_index == 1
        assert len(fresh.available) == 149
        assert fresh.find_available("p1") is None
        assert fresh.roster_for(0).qb.player_id == "p1"
        assert result.snapshot.board.to_dict() == fresh.board.to_dict()

    def test_second_player_at_position_goes_to_superflex(self, store, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory(num_teams=2)
            await recorder.commit(draft_id, PickProposal(1, 0, "p1"))
            await recorder.commit(draft_id, PickProposal(2, 1, "p2"))
            await recorder.commit(draft_id, PickProposal(3, 1, "p6"))
            await recorder.commit(draft_id, PickProposal(4, 0, "p5"))
            return await load_snapshot(store, draft_id)

        roster = asyncio.run(run()).roster_for(0)
        assert roster.qb.player_id == "p1"
        assert roster.superflex.player_id == "p5"

    def test_reasoning_record_written(self, store, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory()
            await recorder.commit(draft_id, PickProposal(
                1, 0, "p1", reasoning="Anchor", confidence=0.8, advisor="best-available"
            ))
            return await store.get(*reasoning_key(draft_id, 1))

        record = asyncio.run(run())
        assert record.exists
        assert record.data["advisor"] == "best-available"
        assert record.data["persona"] == "balanced"
        assert record.data["confidence"] == 0.8
        assert record.data["board_summary"].startswith("Board Analysis")

    def test_events_published(self, recorder, draft_factory, events):
        async def run():
            draft_id = await draft_factory()
            await recorder.commit(draft_id, PickProposal(1, 0, "p1"))

        asyncio.run(run())
        assert [type(e) for e in events] == [PickCommittedEvent]
        assert events[0].pick.player_id == "p1"
        assert events[0].persona == "balanced"

    def test_last_pick_completes_draft(self, store, recorder, draft_factory, events):
        async def run():
            draft_id = await draft_factory(num_teams=2, num_rounds=1)
            await recorder.commit(draft_id, PickProposal(1, 0, "p1"))
            result = await recorder.commit(draft_id, PickProposal(2, 1, "p2"))
            return result, await load_snapshot(store, draft_id)

        result, fresh = asyncio.run(run())
        assert result.draft_complete
        assert fresh.board.phase == DraftPhase.COMPLETED
        assert isinstance(events[-1], DraftCompletedEvent)
        assert events[-1].total_picks == 2

    def test_failing_subscriber_does_not_fail_pick(self, store, bus, recorder, draft_factory):
        def explode(event):
            raise RuntimeError("subscriber down")

        bus.subscribe(PickCommittedEvent, explode)

        async def run():
            draft_id = await draft_factory()
            await recorder.commit(draft_id, PickProposal(1, 0, "p1"))
            return await load_snapshot(store, draft_id)

        assert asyncio.run(run()).board.version == 1


class TestShiftRecording:

    def test_shift_persisted_and_published(self, store, recorder, draft_factory, events):
        async def run():
            personas = ["value-hunter"] + ["balanced"] * 7
            draft_id = await draft_factory(personas=personas)
            result = await recorder.commit(draft_id, PickProposal(1, 0, "p15"))
            return result, await store.get(*shift_key(draft_id, 1))

        result, stored = asyncio.run(run())
        assert result.shift is not None
        assert result.shift.category == ShiftCategory.VALUE_DEVIATION
        assert result.shift.severity == ShiftSeverity.MAJOR
        assert result.shift.persona == "value-hunter"
        assert stored.exists
        assert stored.data["player_picked"] == "Player 15"
        assert any(isinstance(e, ShiftDetectedEvent) for e in events)

    def test_stored_persona_wins_over_proposal(self, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory()
            return await recorder.commit(
                draft_id, PickProposal(1, 0, "p15", persona="value-hunter")
            )

        # Balanced flags a 14-spot reach as well, under its own name
        shift = asyncio.run(run()).shift
        assert shift.persona == "balanced"

    def test_in_character_pick_records_nothing(self, store, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory()
            result = await recorder.commit(draft_id, PickProposal(1, 0, "p1"))
            return result, await store.get(*shift_key(draft_id, 1))

        result, stored = asyncio.run(run())
        assert result.shift is None
        assert not stored.exists


class TestRejections:
    """Proposals that no longer match fresh state."""

    def test_stale_cursor(self, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory()
            await recorder.commit(draft_id, PickProposal(2, 1, "p2"))

        with pytest.raises(DraftConflictError) as exc_info:
            asyncio.run(run())
        assert "Turn conflict" in exc_info.value.message
        assert exc_info.value.snapshot.board.version == 0

    def test_player_already_drafted(self, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory()
            await recorder.commit(draft_id, PickProposal(1, 0, "p1"))
            await recorder.commit(draft_id, PickProposal(2, 1, "p1"))

        with pytest.raises(DraftConflictError) as exc_info:
            asyncio.run(run())
        assert "no longer available" in exc_info.value.message
        assert exc_info.value.snapshot.board.version == 1

    def test_no_slot_for_position(self, store, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory()
            roster = Roster(
                team_index=0,
                qb=make_player(500, Position.QB, player_id="own-qb"),
                superflex=make_player(501, Position.QB, player_id="own-sf"),
            )
            await store.set(*roster_key(draft_id, 0), roster.to_dict())
            await recorder.commit(draft_id, PickProposal(1, 0, "p5"))

        with pytest.raises(DraftConflictError) as exc_info:
            asyncio.run(run())
        assert "no available roster slot" in exc_info.value.message

    def test_exhaustion(self, store, recorder, draft_factory):
        async def run():
            only_qbs = [make_player(r, Position.QB) for r in range(1, 11)]
            draft_id = await draft_factory(players=only_qbs)
            roster = Roster(
                team_index=0,
                qb=make_player(500, Position.QB, player_id="own-qb"),
                superflex=make_player(501, Position.QB, player_id="own-sf"),
            )
            await store.set(*roster_key(draft_id, 0), roster.to_dict())
            await recorder.commit(draft_id, PickProposal(1, 0, "p1"))

        with pytest.raises(DraftExhaustionError) as exc_info:
            asyncio.run(run())
        assert exc_info.value.snapshot is not None

    def test_draft_already_complete(self, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory(num_teams=2, num_rounds=1)
            await recorder.commit(draft_id, PickProposal(1, 0, "p1"))
            await recorder.commit(draft_id, PickProposal(2, 1, "p2"))
            await recorder.commit(draft_id, PickProposal(3, 0, "p3"))

        with pytest.raises(DraftConflictError) as exc_info:
            asyncio.run(run())
        assert exc_info.value.message == "Draft is already complete."

    def test_unknown_draft(self, recorder):
        with pytest.raises(DraftNotFoundError):
            asyncio.run(recorder.commit("missing", PickProposal(1, 0, "p1")))


class TestValidation:

    @pytest.mark.parametrize("proposal", [
        PickProposal(1, 0, "p1", confidence=1.5),
        PickProposal(1, 0, "p1", confidence=float("nan")),
        PickProposal(1, 0, "p1", confidence="sure"),
        PickProposal(1, 0, "p1", reasoning=None),
        PickProposal(0, 0, "p1"),
        PickProposal(1, -1, "p1"),
        PickProposal(1, 0, ""),
        PickProposal(1, 9, "p1"),
    ])
    def test_malformed_proposals(self, recorder, draft_factory, proposal):
        async def run():
            draft_id = await draft_factory()
            await recorder.commit(draft_id, proposal)

        with pytest.raises(DraftValidationError) as exc_info:
            asyncio.run(run())
        assert exc_info.value.snapshot is not None
        assert exc_info.value.snapshot.board.version == 0

    def test_validation_on_unknown_draft_has_no_snapshot(self, recorder):
        with pytest.raises(DraftValidationError) as exc_info:
            asyncio.run(recorder.commit("missing", PickProposal(1, 0, "p1", confidence=-0.1)))
        assert exc_info.value.snapshot is None


class RacingStore(InMemoryKeyValueStore):
    """Lets a rival writer commit between the recorder's read and its write."""

    def __init__(self):
        super().__init__()
        self.raced = False

    async def set_many(self, items, precondition=None):
        if precondition is not None and not self.raced:
            self.raced = True
            board = await self.get(*board_key("draft-1"))
            data = board.data
            data["picks"].append({
                "pick_number": 1,
                "round": 1,
                "team_index": 0,
                "player_id": "p2",
                "player_name": "Player 2",
                "position": "RB",
            })
            await super().set_many({board_key("draft-1"): data})
        await super().set_many(items, precondition)


class TestConcurrency:

    def test_concurrent_commits_for_same_pick(self, store, recorder, draft_factory):
        async def run():
            draft_id = await draft_factory()
            results = await asyncio.gather(
                recorder.commit(draft_id, PickProposal(1, 0, "p1")),
                recorder.commit(draft_id, PickProposal(1, 0, "p2")),
                return_exceptions=True,
            )
            return results, await load_snapshot(store, draft_id)

        results, fresh = asyncio.run(run())
        conflicts = [r for r in results if isinstance(r, DraftConflictError)]
        successes = [r for r in results if not isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(conflicts) == 1
        assert fresh.board.version == 1
        assert len(fresh.available) == 149

    def test_lost_race_raises_conflict_with_fresh_state(self, config, player_pool):
        store = RacingStore()
        recorder = PickRecorder(store, config=config)

        async def run():
            settings = DraftSettings(num_teams=8, num_rounds=5)
            personas = [PersonaAssignment(i, "balanced") for i in range(8)]
            await store.set_many(initial_state_items("draft-1", settings, personas, player_pool))
            await recorder.commit("draft-1", PickProposal(1, 0, "p1"))

        with pytest.raises(DraftConflictError) as exc_info:
            asyncio.run(run())
        assert "committed by another request" in exc_info.value.message
        assert exc_info.value.snapshot.board.version == 1
        # The losing write changed nothing
        assert exc_info.value.snapshot.find_available("p1") is not None
