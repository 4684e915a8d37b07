import discord

from helpers.embeds import (
    STATUS_COLORS,
    create_embed,
    create_training_result_embed,
)
from services.training_results import TrainingResult, TrainingStatus


def make_result(status: TrainingStatus, notes: str = "", fail_count: int = 0) -> TrainingResult:
    return TrainingResult(
        evaluator_id=1, trainee_id=50, status=status, notes=notes, fail_count=fail_count
    )


def test_basic_embed() -> None:
    e = create_embed("Title", "Desc", color=0x123456)
    assert isinstance(e, discord.Embed)
    assert e.title == "Title"
    assert e.description == "Desc"


def test_fail_result_shows_fail_count() -> None:
    e = create_training_result_embed(make_result(TrainingStatus.FAIL, "Try again", 2))
    fields = {f.name: f.value for f in e.fields}

    assert fields["Result"] == "**Fail**"
    assert fields["Evaluator"] == "<@1>"
    assert fields["Recorded Fails"] == "2"
    assert fields["Notes"] == "Try again"
    assert e.color.value == STATUS_COLORS[TrainingStatus.FAIL]
    assert "<@50>" in (e.description or "")


def test_pass_result_hides_fail_count_and_fills_empty_notes() -> None:
    e = create_training_result_embed(make_result(TrainingStatus.PASS))
    fields = {f.name: f.value for f in e.fields}

    assert "Recorded Fails" not in fields
    assert fields["Notes"] == "*No notes provided.*"


def test_long_notes_are_truncated_to_field_limit() -> None:
    e = create_training_result_embed(make_result(TrainingStatus.ON_HOLD, "x" * 2000))
    notes = next(f for f in e.fields if f.name == "Notes")
    assert len(notes.value) == 1024
