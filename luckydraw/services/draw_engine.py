"""Top-level draw engine: owns the pool, awards, per-award state and the ledger."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from contextlib import ExitStack
from datetime import datetime, timezone
from threading import Lock, RLock

from luckydraw.errors import (
    AwardCompletedError,
    AwardExistsError,
    AwardNotFoundError,
    InsufficientPoolError,
    NoResultsError,
    RoundInProgressError,
)
from luckydraw.models import AdHocAward, Award, AwardProgress, RoundResult, WinnerRecord
from luckydraw.services.award_scheduler import AwardScheduler
from luckydraw.services.draw_session import DrawSession, DrawState
from luckydraw.services.number_pool import NumberPool, sort_identifiers
from luckydraw.services.randomness import RandomnessSource
from luckydraw.services.result_ledger import ResultLedger
from luckydraw.services.sampler import Sampler

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DrawEngine:
    """Draw unique winners for several awards from one shared pool.

    All mutation of drawn state goes through :meth:`commit_round`. Round
    begin/commit is serialized per award; the pool and ledger are guarded by
    one engine lock so two awards committing at once never share a winner.
    """

    def __init__(
        self,
        *,
        randomness: RandomnessSource | None = None,
        sampler: Sampler | None = None,
        scheduler: AwardScheduler | None = None,
        pool: NumberPool | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._random = randomness or RandomnessSource()
        self._sampler = sampler or Sampler(self._random)
        self._scheduler = scheduler or AwardScheduler()
        self._pool = pool or NumberPool()
        self._ledger = ResultLedger()
        self._clock = clock or _utcnow

        self._awards: dict[str, Award] = {}
        self._states: dict[str, DrawState] = {}
        self._sessions: dict[str, DrawSession] = {}
        self._award_locks: dict[str, Lock] = {}
        self._lock = RLock()

    @property
    def pool(self) -> NumberPool:
        return self._pool

    @property
    def ledger(self) -> ResultLedger:
        return self._ledger

    @property
    def scheduler(self) -> AwardScheduler:
        return self._scheduler

    @property
    def randomness(self) -> RandomnessSource:
        return self._random

    def load_pool(self, identifiers: Iterable[str]) -> int:
        with self._lock:
            self._pool.load(identifiers)
            logger.info(
                "Pool loaded size=%s already_drawn=%s retired=%s",
                self._pool.size,
                self._pool.drawn_count,
                self._pool.retired_count,
            )
            return self._pool.size

    # Awards

    def register_award(self, award: Award) -> Award:
        self._scheduler.validate(award)
        with self._lock:
            if award.id in self._awards:
                raise AwardExistsError(award.id)
            self._awards[award.id] = award
            self._states[award.id] = DrawState(award_id=award.id)
            self._sessions[award.id] = DrawSession(award_id=award.id)
            self._award_locks[award.id] = Lock()
        logger.info("Registered award id=%s kind=%s quota=%s", award.id, award.kind.value, award.quota)
        return award

    def create_ad_hoc_award(self, name: str, quota: int) -> AdHocAward:
        award = AdHocAward(id=f"adhoc_{uuid.uuid4().hex[:12]}", name=name.strip(), quota=int(quota))
        self.register_award(award)
        return award

    def awards(self) -> list[Award]:
        with self._lock:
            return list(self._awards.values())

    def get_award(self, award_id: str) -> Award:
        award = self._awards.get(award_id)
        if award is None:
            raise AwardNotFoundError(award_id)
        return award

    # Rounds

    def begin_round(self, award_id: str) -> int:
        """Open a round and return how many winners it will produce."""

        award = self.get_award(award_id)
        with self._award_locks[award_id]:
            state = self._states[award_id]
            session = self._sessions[award_id]
            if state.completed:
                raise AwardCompletedError(award_id, award.quota)
            if session.rolling:
                raise RoundInProgressError(award_id)

            count = self._scheduler.next_round_size(award, state.drawn_count)
            if count == 0:
                raise AwardCompletedError(award_id, award.quota)
            with self._lock:
                available = self._pool.available_count
            if available < count:
                raise InsufficientPoolError(needed=count, available=available)

            session.begin(count)
            logger.debug("Round opened award=%s size=%s", award_id, count)
            return count

    def commit_round(self, award_id: str) -> RoundResult:
        award = self.get_award(award_id)
        with self._award_locks[award_id]:
            session = self._sessions[award_id]
            count = session.require_rolling()
            state = self._states[award_id]

            with self._lock:
                candidates = self._pool.available()
                if len(candidates) < count:
                    # Another award consumed the pool since this round opened.
                    session.close()
                    raise InsufficientPoolError(needed=count, available=len(candidates))

                winners = self._sampler.sample(candidates, count)
                self._pool.mark_drawn(winners)
                ordered = sort_identifiers(winners)
                now = self._clock()
                for identifier in ordered:
                    record = WinnerRecord(
                        identifier=identifier,
                        award_id=award_id,
                        award_name=award.name,
                        timestamp=now,
                    )
                    self._ledger.append(record)
                    state.winners.append(record)
                state.drawn_count += count
                state.completed = state.drawn_count >= award.quota
                result = RoundResult(
                    award_id=award_id,
                    winners=ordered,
                    round_size=count,
                    drawn_count=state.drawn_count,
                    quota=award.quota,
                    completed=state.completed,
                )

            session.mark_committed()

        logger.info(
            "Round committed award=%s size=%s drawn=%s/%s completed=%s",
            award_id,
            count,
            result.drawn_count,
            award.quota,
            result.completed,
        )
        return result

    def draw(self, award_id: str) -> RoundResult:
        """Begin and commit a round in one call."""

        self.begin_round(award_id)
        return self.commit_round(award_id)

    # Progress

    def drawn_count(self, award_id: str) -> int:
        self.get_award(award_id)
        return self._states[award_id].drawn_count

    def is_completed(self, award_id: str) -> bool:
        self.get_award(award_id)
        return self._states[award_id].completed

    def is_rolling(self, award_id: str) -> bool:
        self.get_award(award_id)
        return self._sessions[award_id].rolling

    def progress(self, award_id: str) -> AwardProgress:
        award = self.get_award(award_id)
        state = self._states[award_id]
        return AwardProgress(
            award_id=award.id,
            name=award.name,
            kind=award.kind.value,
            quota=award.quota,
            rounds=award.round_plan(),
            drawn_count=state.drawn_count,
            completed=state.completed,
            rolling=self._sessions[award_id].rolling,
            next_round_size=self._scheduler.next_round_size(award, state.drawn_count),
            current_round=self._scheduler.round_number(award, state.drawn_count),
            winners=list(state.winners),
        )

    def exportable_results(self) -> list[WinnerRecord]:
        with self._lock:
            if self._ledger.total_drawn() < 1:
                raise NoResultsError()
            return self._ledger.records()

    def reset_all_draw_state(self) -> None:
        """Forget every winner; the pool contents and award configuration stay."""

        with self._lock:
            award_locks = [self._award_locks[key] for key in sorted(self._award_locks)]

        with ExitStack() as stack:
            # Same order as commit_round: award locks first, then the engine lock.
            for award_lock in award_locks:
                stack.enter_context(award_lock)
            stack.enter_context(self._lock)

            cleared = self._ledger.total_drawn()
            self._pool.reset()
            self._ledger.clear()
            for state in self._states.values():
                state.clear()
            for session in self._sessions.values():
                session.close()
        logger.warning("Draw state reset; %s winner records discarded", cleared)
