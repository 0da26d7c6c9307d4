from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from threading import Event, Thread

import pytest

from luckydraw.errors import (
    AwardCompletedError,
    AwardExistsError,
    AwardNotFoundError,
    InsufficientPoolError,
    InvalidAwardConfigError,
    NoResultsError,
    RoundInProgressError,
    RoundNotStartedError,
)
from luckydraw.models import ScheduledAward
from luckydraw.services.draw_engine import DrawEngine
from luckydraw.services.draw_session import DrawSession
from luckydraw.services.number_pool import sort_identifiers
from luckydraw.services.sampler import Sampler


def _award(award_id: str, quota: int, rounds: tuple[int, ...], name: str | None = None) -> ScheduledAward:
    return ScheduledAward(id=award_id, name=name or award_id.title(), quota=quota, rounds=rounds)


def test_single_round_award_completes(engine):
    engine.register_award(_award("first", 5, (5,)))

    result = engine.draw("first")

    assert len(result.winners) == 5
    assert engine.drawn_count("first") == 5
    assert engine.is_completed("first")
    assert result.completed
    assert engine.pool.available_count == 175
    assert len(engine.ledger.by_award("first")) == 5


def test_rounds_follow_schedule(engine):
    engine.register_award(_award("lucky", 43, (15, 15, 13)))

    sizes = []
    while not engine.is_completed("lucky"):
        before = engine.drawn_count("lucky")
        size = engine.begin_round("lucky")
        assert engine.is_rolling("lucky")
        result = engine.commit_round("lucky")
        assert not engine.is_rolling("lucky")
        assert result.drawn_count == before + size
        assert engine.drawn_count("lucky") <= 43
        sizes.append(size)

    assert sizes == [15, 15, 13]
    assert engine.drawn_count("lucky") == 43


def test_begin_does_not_select_or_reserve(engine):
    engine.register_award(_award("third", 20, (10, 10)))

    assert engine.begin_round("third") == 10
    assert engine.pool.drawn_count == 0
    assert engine.ledger.total_drawn() == 0
    assert engine.drawn_count("third") == 0


def test_ad_hoc_award_takes_exactly_remaining_pool(engine):
    engine.load_pool([str(n) for n in range(1, 11)])
    engine.register_award(_award("first", 3, (3,)))
    engine.draw("first")

    bonus = engine.create_ad_hoc_award("Bonus", 7)
    assert bonus.id.startswith("adhoc_")
    assert engine.scheduler.next_round_size(bonus, engine.drawn_count(bonus.id)) == 7

    result = engine.draw(bonus.id)

    assert len(result.winners) == 7
    assert engine.is_completed(bonus.id)
    assert engine.pool.available() == []


def test_completed_award_rejects_new_round_without_mutation(engine):
    engine.register_award(_award("first", 5, (5,)))
    engine.draw("first")
    pool_drawn = engine.pool.drawn_count
    total = engine.ledger.total_drawn()

    with pytest.raises(AwardCompletedError):
        engine.begin_round("first")

    assert engine.pool.drawn_count == pool_drawn
    assert engine.ledger.total_drawn() == total
    assert engine.drawn_count("first") == 5
    assert not engine.is_rolling("first")


def test_insufficient_pool_reports_context(engine):
    engine.load_pool(["1", "2", "3", "4", "5"])
    engine.register_award(_award("lucky", 10, (10,)))

    with pytest.raises(InsufficientPoolError) as exc_info:
        engine.begin_round("lucky")

    assert exc_info.value.details == {"needed": 10, "available": 5}
    assert "need 10, have 5" in exc_info.value.message
    assert not engine.is_rolling("lucky")
    assert engine.pool.drawn_count == 0


def test_only_one_open_round_per_award(engine):
    engine.register_award(_award("third", 20, (10, 10)))
    engine.begin_round("third")

    with pytest.raises(RoundInProgressError):
        engine.begin_round("third")


def test_commit_requires_open_round(engine):
    engine.register_award(_award("third", 20, (10, 10)))

    with pytest.raises(RoundNotStartedError):
        engine.commit_round("third")


def test_commit_rechecks_pool_after_other_awards(engine):
    engine.load_pool([str(n) for n in range(1, 9)])
    engine.register_award(_award("a", 5, (5,)))
    engine.register_award(_award("b", 5, (5,)))

    engine.begin_round("a")
    engine.draw("b")

    with pytest.raises(InsufficientPoolError):
        engine.commit_round("a")

    assert engine.drawn_count("a") == 0
    assert not engine.is_rolling("a")
    assert engine.pool.drawn_count == 5


def test_registration_errors(engine):
    with pytest.raises(InvalidAwardConfigError):
        engine.register_award(_award("bad", 10, (5, 4)))

    engine.register_award(_award("first", 5, (5,)))
    with pytest.raises(AwardExistsError):
        engine.register_award(_award("first", 5, (5,)))

    with pytest.raises(AwardNotFoundError):
        engine.begin_round("missing")
    with pytest.raises(AwardNotFoundError):
        engine.drawn_count("missing")


def test_winners_are_unique_across_awards(engine):
    engine.register_award(_award("lucky", 43, (13, 15, 15)))
    engine.register_award(_award("third", 20, (10, 10)))
    engine.register_award(_award("second", 9, (9,)))
    engine.register_award(_award("first", 5, (5,)))
    bonus = engine.create_ad_hoc_award("Bonus", 30)

    for award in engine.awards():
        while not engine.is_completed(award.id):
            engine.draw(award.id)

    identifiers = [r.identifier for r in engine.ledger.records()]
    assert len(identifiers) == 43 + 20 + 9 + 5 + 30
    assert len(set(identifiers)) == len(identifiers)
    assert engine.pool.drawn_count == len(identifiers)
    assert engine.drawn_count(bonus.id) == 30


def test_winners_are_sorted_for_display(engine):
    engine.load_pool(["10", "9", "100", "1", "b", "a", "20"])
    engine.register_award(_award("all", 7, (7,)))

    result = engine.draw("all")

    assert result.winners == ["1", "9", "10", "20", "100", "a", "b"]
    assert result.winners == sort_identifiers(result.winners)


def test_records_carry_award_and_timestamp(pool_180):
    stamp = datetime(2026, 1, 30, 19, 0, tzinfo=timezone.utc)
    engine = DrawEngine(clock=lambda: stamp)
    engine.load_pool(pool_180)
    engine.register_award(_award("second", 9, (9,), name="Second Prize"))

    engine.draw("second")

    records = engine.exportable_results()
    assert len(records) == 9
    assert {r.award_name for r in records} == {"Second Prize"}
    assert {r.timestamp for r in records} == {stamp}


def test_export_requires_a_winner(engine):
    with pytest.raises(NoResultsError):
        engine.exportable_results()


def test_results_keep_commit_order(engine):
    engine.register_award(_award("third", 20, (10, 10)))
    engine.register_award(_award("first", 5, (5,)))

    first_round = engine.draw("third").winners
    first_prize = engine.draw("first").winners
    second_round = engine.draw("third").winners

    assert [r.identifier for r in engine.exportable_results()] == first_round + first_prize + second_round


def test_reset_restores_counts_and_keeps_pool(engine, pool_180):
    engine.register_award(_award("third", 20, (10, 10)))
    engine.register_award(_award("first", 5, (5,)))
    bonus = engine.create_ad_hoc_award("Bonus", 4)
    engine.draw("third")
    engine.draw("first")
    engine.draw(bonus.id)
    engine.begin_round("third")

    engine.reset_all_draw_state()

    for award in engine.awards():
        assert engine.drawn_count(award.id) == 0
        assert not engine.is_completed(award.id)
        assert not engine.is_rolling(award.id)
    assert engine.pool.drawn_count == 0
    assert engine.pool.identifiers() == pool_180
    assert engine.ledger.total_drawn() == 0
    assert engine.draw("first").drawn_count == 5


def test_progress_snapshot(engine):
    engine.register_award(_award("lucky", 43, (13, 15, 15)))
    engine.draw("lucky")

    progress = engine.progress("lucky")

    assert progress.drawn_count == 13
    assert progress.next_round_size == 15
    assert progress.current_round == 2
    assert progress.rounds == (13, 15, 15)
    assert progress.kind == "SCHEDULED"
    assert len(progress.winners) == 13


def test_large_pool_draw_uses_reservoir(scripted):
    engine = DrawEngine(sampler=Sampler(scripted(lambda max_value: max_value - 1)))
    engine.load_pool([f"{n:05d}" for n in range(1, 5001)])
    engine.register_award(_award("lucky", 100, (50, 50)))

    result = engine.draw("lucky")

    assert result.winners == [f"{n:05d}" for n in range(1, 51)]
    assert engine.pool.available_count == 4950


def test_concurrent_draws_never_share_winners(engine):
    engine.load_pool([str(n) for n in range(1, 401)])
    for index in range(8):
        engine.register_award(_award(f"award{index}", 40, (10, 10, 10, 10)))

    def _drain(award_id: str) -> None:
        while not engine.is_completed(award_id):
            engine.draw(award_id)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(_drain, [a.id for a in engine.awards()]))

    identifiers = [r.identifier for r in engine.ledger.records()]
    assert len(identifiers) == 320
    assert len(set(identifiers)) == 320


def test_reloaded_winner_is_never_drawn_again(engine):
    engine.load_pool(["1", "2"])
    engine.register_award(_award("a", 1, (1,)))
    engine.register_award(_award("b", 1, (1,)))
    engine.register_award(_award("c", 1, (1,)))
    winner = engine.draw("a").winners[0]
    other = "2" if winner == "1" else "1"

    engine.load_pool([other])
    engine.load_pool([winner])

    assert engine.pool.available() == []
    with pytest.raises(InsufficientPoolError):
        engine.draw("b")

    engine.load_pool([winner, other, "3"])
    result = engine.draw("c")

    assert result.winners[0] != winner
    identifiers = [r.identifier for r in engine.ledger.records()]
    assert len(set(identifiers)) == len(identifiers)


def test_reset_waits_for_a_commit_in_flight(engine, monkeypatch):
    engine.register_award(_award("lucky", 43, (13, 15, 15)))
    engine.draw("lucky")
    assert engine.begin_round("lucky") == 15

    entered = Event()
    release = Event()
    require_rolling = DrawSession.require_rolling

    def _stalled(session):
        count = require_rolling(session)
        entered.set()
        release.wait(timeout=5)
        return count

    monkeypatch.setattr(DrawSession, "require_rolling", _stalled)
    committer = Thread(target=engine.commit_round, args=("lucky",))
    committer.start()
    assert entered.wait(timeout=5)

    resetter = Thread(target=engine.reset_all_draw_state)
    resetter.start()
    resetter.join(timeout=0.2)
    assert resetter.is_alive()

    release.set()
    committer.join(timeout=5)
    resetter.join(timeout=5)
    monkeypatch.undo()

    assert engine.drawn_count("lucky") == 0
    assert engine.ledger.total_drawn() == 0
    assert engine.pool.drawn_count == 0
    assert engine.begin_round("lucky") == 13
