import pytest

from services.store import Resource
from services.training_results import TrainingResultFlow, TrainingStatus


@pytest.fixture
def flow(store) -> TrainingResultFlow:
    return TrainingResultFlow(store)


def test_status_labels() -> None:
    assert [s.label for s in TrainingStatus] == ["Pass", "Fail", "On Hold", "Partial Retake"]


def test_full_flow_pass_does_not_touch_fail_counter(flow, store) -> None:
    flow.begin(1, 50)
    assert flow.select_status(1, TrainingStatus.PASS)

    result = flow.submit(1, "  Great comms.  ")

    assert result.status is TrainingStatus.PASS
    assert result.trainee_id == 50
    assert result.evaluator_id == 1
    assert result.notes == "Great comms."
    assert result.fail_count == 0
    assert flow.draft_for(1) is None
    assert store.load(Resource.FAIL_COUNTS, None) is None


def test_fail_increments_and_persists(flow, store) -> None:
    for expected in (1, 2):
        flow.begin(1, 50)
        flow.select_status(1, "FAIL")
        result = flow.submit(1, "")
        assert result.fail_count == expected

    assert store.load(Resource.FAIL_COUNTS, {}) == {"50": 2}
    assert TrainingResultFlow(store).fail_count(50) == 2


@pytest.mark.parametrize("status", [TrainingStatus.ON_HOLD, TrainingStatus.PARTIAL_RETAKE])
def test_non_fail_statuses_report_existing_count(flow, store, status) -> None:
    store.save(Resource.FAIL_COUNTS, {"50": 3})
    flow = TrainingResultFlow(store)
    flow.begin(1, 50)
    flow.select_status(1, status)

    assert flow.submit(1, "notes").fail_count == 3
    assert store.load(Resource.FAIL_COUNTS, {}) == {"50": 3}


def test_submit_without_draft_or_status(flow) -> None:
    assert flow.submit(1, "x") is None
    flow.begin(1, 50)
    assert flow.submit(1, "x") is None
    assert flow.draft_for(1) is not None


def test_select_status_without_draft(flow) -> None:
    assert flow.select_status(1, TrainingStatus.PASS) is False


def test_new_begin_replaces_old_draft(flow) -> None:
    flow.begin(1, 50)
    flow.select_status(1, TrainingStatus.FAIL)
    flow.begin(1, 60)

    draft = flow.draft_for(1)
    assert draft.trainee_id == 60
    assert draft.status is None


def test_drafts_are_per_evaluator(flow) -> None:
    flow.begin(1, 50)
    flow.begin(2, 60)
    flow.select_status(1, TrainingStatus.PASS)
    flow.select_status(2, TrainingStatus.FAIL)

    assert flow.submit(2, "").trainee_id == 60
    assert flow.submit(1, "").trainee_id == 50


def test_bad_counter_values_are_ignored(store) -> None:
    store.save(Resource.FAIL_COUNTS, {"1": "x", "2": 4})
    flow = TrainingResultFlow(store)
    assert flow.fail_count(1) == 0
    assert flow.fail_count("2") == 4
