"""
Unit tests for progress events and percentage bands.
"""
import pytest

from pipeline.progress import ProcessingProgress, ProgressLevel, ProgressStage, RoleBand


class TestProcessingProgress:

    def test_wire_frame_omits_unset_fields(self):
        event = ProcessingProgress(stage=ProgressStage.PARSING, message="Understanding", percentage=0)

        assert event.to_dict() == {"stage": "parsing", "message": "Understanding", "percentage": 0, "level": "info"}

    def test_wire_frame_uses_camel_case_counters(self):
        event = ProcessingProgress(
            stage=ProgressStage.SCORING,
            message="Scoring batch 1 of 2",
            percentage=12.3456,
            role="QA",
            current_batch=1,
            total_batches=2,
            total_candidates=150,
        )
        data = event.to_dict()

        assert data["currentBatch"] == 1
        assert data["totalBatches"] == 2
        assert data["totalCandidates"] == 150
        assert data["percentage"] == 12.3
        assert data["role"] == "QA"
        assert "candidatesProcessed" not in data

    def test_warning_level(self):
        event = ProcessingProgress(
            stage=ProgressStage.ERROR, level=ProgressLevel.WARNING, message="none", percentage=50,
        )
        assert event.to_dict()["level"] == "warning"


class TestRoleBand:

    def test_single_role_spans_parsing_end_to_100(self):
        band = RoleBand.for_role(0, 1)
        assert band.at(0) == 5
        assert band.at(1) == 100

    def test_roles_split_the_remainder_equally(self):
        first, second = RoleBand.for_role(0, 2), RoleBand.for_role(1, 2)

        assert first.at(1) == pytest.approx(second.at(0))
        assert second.at(0) == pytest.approx(52.5)

    def test_scoring_moves_through_its_slice(self):
        band = RoleBand.for_role(0, 1)
        assert band.scoring(1, 4) == pytest.approx(5 + 95 * 0.2)
        assert band.scoring(4, 4) == pytest.approx(5 + 95 * (0.2 + 0.3 * 0.75))

    def test_fractions_are_clamped(self):
        band = RoleBand.for_role(0, 1)
        assert band.at(2) == 100
        assert band.at(-1) == 5
