"""
Unit tests for BatchScorer.
"""
import json
import threading
import time

import pytest

from core.exceptions import CompletionServiceError
from core.scorer.batch_scorer import (
    FALLBACK_REASON,
    SCORING_MAX_TOKENS,
    SCORING_TEMPERATURE,
    UNSCORED_REASON,
    BatchScorer,
)
from tests.mocks.llm_mocks import ScriptedLLMProvider, candidate_ids


def _scores(entries):
    return json.dumps({"scores": entries})


@pytest.fixture
def candidates(make_candidate):
    return [make_candidate(f"c{i}", skills=["Node.js"]) for i in range(5)]


class TestBatching:

    def test_one_call_per_batch_with_progress(self, make_candidate, make_role):
        pool = [make_candidate(f"c{i}") for i in range(250)]
        llm = ScriptedLLMProvider()
        progress = []

        scored = BatchScorer(llm, batch_size=100).score(pool, make_role(), on_progress=lambda c, t: progress.append((c, t)))

        assert len(scored) == 250
        assert len(llm.calls_of("scoring")) == 3
        assert progress == [(1, 3), (2, 3), (3, 3)]
        assert sorted(len(candidate_ids(c["prompt"])) for c in llm.calls) == [50, 100, 100]

    def test_uses_scoring_temperature_and_token_limit(self, candidates, make_role):
        llm = ScriptedLLMProvider()
        BatchScorer(llm).score(candidates, make_role())

        call = llm.calls_of("scoring")[0]
        assert call["temperature"] == SCORING_TEMPERATURE
        assert call["max_tokens"] == SCORING_MAX_TOKENS

    def test_waves_bound_concurrency(self, make_candidate, make_role):
        pool = [make_candidate(f"c{i}") for i in range(5)]
        lock = threading.Lock()
        state = {"in_flight": 0, "peak": 0}
        finished = []

        def slow_scores(prompt):
            with lock:
                state["in_flight"] += 1
                state["peak"] = max(state["peak"], state["in_flight"])
            time.sleep(0.05)
            ids = candidate_ids(prompt)
            with lock:
                state["in_flight"] -= 1
                finished.append(ids[0])
            return _scores([{"id": i, "score": 70, "reason": "ok"} for i in ids])

        started = []
        scorer = BatchScorer(ScriptedLLMProvider(scoring=slow_scores), batch_size=1, max_parallel=2)
        scorer.score(pool, make_role(), on_progress=lambda c, t: started.append((c, list(finished))))

        assert state["peak"] <= 2
        # batch 3 starts only after both batches of the first wave finished
        assert sorted(started[2][1]) == ["c0", "c1"]
        assert sorted(started[4][1]) == ["c0", "c1", "c2", "c3"]

    def test_merged_scores_sorted_regardless_of_completion_order(self, make_candidate, make_role):
        pool = [make_candidate(f"c{i}") for i in range(6)]
        finished = []

        def reverse_finishing_scores(prompt):
            ids = candidate_ids(prompt)
            batch = int(ids[0][1:]) // 2
            time.sleep((2 - batch) * 0.05)
            finished.append(batch)
            return _scores([{"id": cid, "score": 10 * (batch + 1) + int(cid[1:]) % 2} for cid in ids])

        llm = ScriptedLLMProvider(scoring=reverse_finishing_scores)

        scored = BatchScorer(llm, batch_size=2, max_parallel=3).score(pool, make_role())

        assert finished == [2, 1, 0]
        assert [s.score for s in scored] == [31, 30, 21, 20, 11, 10]
        assert [s.candidate.id for s in scored] == ["c5", "c4", "c3", "c2", "c1", "c0"]

    def test_empty_pool(self, make_role):
        llm = ScriptedLLMProvider()
        assert BatchScorer(llm).score([], make_role()) == []
        assert llm.calls == []


class TestResponseMapping:

    def test_sorted_descending_and_stable(self, candidates, make_role):
        llm = ScriptedLLMProvider(scoring=_scores([
            {"id": "c0", "score": 40, "reason": "weak"},
            {"id": "c1", "score": 90, "reason": "great"},
            {"id": "c2", "score": 70, "reason": "good"},
            {"id": "c3", "score": 90, "reason": "great too"},
            {"id": "c4", "score": 70, "reason": "good too"},
        ]))

        scored = BatchScorer(llm).score(candidates, make_role())

        assert [s.candidate.id for s in scored] == ["c1", "c3", "c2", "c4", "c0"]
        assert scored[0].brief_reasoning == "great"
        assert scored[0].role == "Backend Engineer"

    def test_scores_are_clamped(self, candidates, make_role):
        llm = ScriptedLLMProvider(scoring=_scores([
            {"id": "c0", "score": 150, "reason": "!"},
            {"id": "c1", "score": -5, "reason": "?"},
        ]))
        by_id = {s.candidate.id: s.score for s in BatchScorer(llm).score(candidates, make_role())}

        assert by_id["c0"] == 100
        assert by_id["c1"] == 0

    def test_omitted_candidates_get_neutral_score(self, candidates, make_role):
        llm = ScriptedLLMProvider(scoring=_scores([{"id": "c0", "score": 80, "reason": "ok"}]))
        scored = {s.candidate.id: s for s in BatchScorer(llm).score(candidates, make_role())}

        assert scored["c0"].score == 80
        assert scored["c4"].score == 50
        assert scored["c4"].brief_reasoning == UNSCORED_REASON

    def test_unknown_ids_are_ignored(self, candidates, make_role):
        llm = ScriptedLLMProvider(scoring=_scores([
            {"id": "ghost", "score": 99, "reason": "?"},
            {"id": "c2", "score": 60, "reason": "ok"},
        ]))
        scored = BatchScorer(llm).score(candidates, make_role())

        assert len(scored) == len(candidates)
        assert "ghost" not in {s.candidate.id for s in scored}

    def test_markdown_wrapped_response_is_repaired(self, candidates, make_role):
        llm = ScriptedLLMProvider(scoring='```json\n{"scores": [{"id": "c3", "score": 88, "reason": "**solid**",},]}\n```')
        scored = BatchScorer(llm).score(candidates, make_role())

        assert scored[0].candidate.id == "c3"
        assert scored[0].brief_reasoning == "solid"


class TestFailureFallback:

    def test_service_failure_scores_batch_neutrally(self, make_candidate, make_role):
        pool = [make_candidate(f"c{i}") for i in range(4)]

        def flaky(prompt):
            ids = candidate_ids(prompt)
            if "c2" in ids:
                raise CompletionServiceError("Failed after 3 retries: down")
            return _scores([{"id": i, "score": 90, "reason": "ok"} for i in ids])

        scored = BatchScorer(ScriptedLLMProvider(scoring=flaky), batch_size=2).score(pool, make_role())
        by_id = {s.candidate.id: s for s in scored}

        assert by_id["c0"].score == 90
        assert by_id["c2"].score == 50
        assert by_id["c3"].brief_reasoning == FALLBACK_REASON
        assert [s.candidate.id for s in scored][:2] == ["c0", "c1"]

    def test_unparseable_response_scores_batch_neutrally(self, candidates, make_role):
        llm = ScriptedLLMProvider(scoring="Sorry, I cannot rate these people.")
        scored = BatchScorer(llm).score(candidates, make_role())

        assert {s.score for s in scored} == {50}
        assert {s.brief_reasoning for s in scored} == {FALLBACK_REASON}
