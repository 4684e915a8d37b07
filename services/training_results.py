"""
Training result wizard.

An evaluator runs ``/trainingresults`` for a trainee, picks a status from a
select menu, then types notes into a modal. Drafts are kept per evaluator
until submitted; abandoned drafts are simply replaced the next time that
evaluator starts one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from services.store import JsonStore, Resource
from utils.logging import get_logger

logger = get_logger(__name__)


class TrainingStatus(str, Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    ON_HOLD = "ON_HOLD"
    PARTIAL_RETAKE = "PARTIAL_RETAKE"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    TrainingStatus.PASS: "Pass",
    TrainingStatus.FAIL: "Fail",
    TrainingStatus.ON_HOLD: "On Hold",
    TrainingStatus.PARTIAL_RETAKE: "Partial Retake",
}


@dataclass
class TrainingResultDraft:
    evaluator_id: int
    trainee_id: int
    status: TrainingStatus | None = None


@dataclass(frozen=True)
class TrainingResult:
    evaluator_id: int
    trainee_id: int
    status: TrainingStatus
    notes: str
    fail_count: int


class TrainingResultFlow:
    """Owns the per-evaluator drafts and the persisted fail counters."""

    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self._drafts: dict[int, TrainingResultDraft] = {}

        raw = store.load(Resource.FAIL_COUNTS, {})
        if not isinstance(raw, dict):
            logger.warning("Fail counter document is not a mapping; starting fresh")
            raw = {}
        self._fail_counts: dict[str, int] = {}
        for trainee, count in raw.items():
            try:
                self._fail_counts[str(trainee)] = max(int(count), 0)
            except (TypeError, ValueError):
                logger.warning(f"Ignoring bad fail count {count!r} for {trainee}")

    def draft_for(self, evaluator_id: int) -> TrainingResultDraft | None:
        return self._drafts.get(int(evaluator_id))

    def fail_count(self, trainee_id: int | str) -> int:
        return self._fail_counts.get(str(trainee_id), 0)

    def begin(self, evaluator_id: int, trainee_id: int) -> TrainingResultDraft:
        draft = TrainingResultDraft(evaluator_id=int(evaluator_id), trainee_id=int(trainee_id))
        self._drafts[draft.evaluator_id] = draft
        return draft

    def select_status(self, evaluator_id: int, status: TrainingStatus | str) -> bool:
        draft = self._drafts.get(int(evaluator_id))
        if draft is None:
            return False
        draft.status = TrainingStatus(status)
        return True

    def submit(self, evaluator_id: int, notes: str) -> TrainingResult | None:
        """Finalize the evaluator's draft; None if there is nothing to submit."""
        draft = self._drafts.get(int(evaluator_id))
        if draft is None or draft.status is None:
            return None

        del self._drafts[draft.evaluator_id]

        if draft.status is TrainingStatus.FAIL:
            key = str(draft.trainee_id)
            self._fail_counts[key] = self._fail_counts.get(key, 0) + 1
            self._store.save(Resource.FAIL_COUNTS, dict(self._fail_counts))

        result = TrainingResult(
            evaluator_id=draft.evaluator_id,
            trainee_id=draft.trainee_id,
            status=draft.status,
            notes=notes.strip(),
            fail_count=self.fail_count(draft.trainee_id),
        )
        logger.info(
            f"Training result recorded: {result.status.value}",
            extra={"user_id": str(result.evaluator_id), "trainee_id": str(result.trainee_id)},
        )
        return result
