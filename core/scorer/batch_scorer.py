"""
Batch Scorer - coarse LLM scoring of a filtered candidate pool.

The pool is split into fixed-size batches and scored in waves of at most
``max_parallel`` concurrent completion calls; every call in a wave finishes
before the next wave starts. A batch whose call or response cannot be
used is scored neutrally instead of failing the role.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional

from core.exceptions import CompletionServiceError, ResponseRepairError
from core.llm.interfaces import LLMProvider
from core.llm.prompt_builder import build_batch_scoring_prompt
from core.llm.response_repair import repair_json_object
from core.query.models import RoleRequirement
from core.scorer.models import ScoredCandidate
from etl.candidates.models import NormalizedCandidate

logger = logging.getLogger(__name__)

BATCH_SIZE = 100
MAX_PARALLEL_BATCHES = 3
NEUTRAL_SCORE = 50

SCORING_TEMPERATURE = 0.3
SCORING_MAX_TOKENS = 3000

FALLBACK_REASON = "Error during scoring"
UNSCORED_REASON = "Not scored by model"

ProgressCallback = Callable[[int, int], None]


def split_batches(candidates: List[NormalizedCandidate], batch_size: int) -> List[List[NormalizedCandidate]]:
    return [candidates[i:i + batch_size] for i in range(0, len(candidates), batch_size)]


def _coerce_score(value, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        score = float(value)
    except (TypeError, ValueError):
        return default
    return max(0.0, min(100.0, score))


class BatchScorer:
    """Scores candidates against a role in bounded-size, bounded-concurrency batches."""

    def __init__(
        self,
        llm: LLMProvider,
        batch_size: int = BATCH_SIZE,
        max_parallel: int = MAX_PARALLEL_BATCHES,
        neutral_score: float = NEUTRAL_SCORE,
    ):
        self.llm = llm
        self.batch_size = max(1, batch_size)
        self.max_parallel = max(1, max_parallel)
        self.neutral_score = neutral_score

    def score(
        self,
        candidates: List[NormalizedCandidate],
        role: RoleRequirement,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[ScoredCandidate]:
        """Score every candidate and return them sorted by descending score."""
        batches = split_batches(candidates, self.batch_size)
        total_batches = len(batches)
        results: List[List[ScoredCandidate]] = [[] for _ in batches]

        logger.info(
            f"Scoring {len(candidates)} candidates for {role.title} in {total_batches} batch(es), "
            f"{self.max_parallel} at a time"
        )

        with ThreadPoolExecutor(max_workers=self.max_parallel) as executor:
            for wave_start in range(0, total_batches, self.max_parallel):
                wave = range(wave_start, min(wave_start + self.max_parallel, total_batches))
                futures = {}
                for index in wave:
                    if on_progress:
                        on_progress(index + 1, total_batches)
                    futures[index] = executor.submit(self.score_batch, batches[index], role)
                for index, future in futures.items():
                    results[index] = future.result()

        scored = [item for batch_result in results for item in batch_result]
        return sorted(scored, key=lambda s: s.score, reverse=True)

    def score_batch(self, batch: List[NormalizedCandidate], role: RoleRequirement) -> List[ScoredCandidate]:
        """Score one batch; falls back to neutral scores on any service or parse failure."""
        try:
            content = self.llm.complete(
                build_batch_scoring_prompt(batch, role),
                temperature=SCORING_TEMPERATURE,
                max_tokens=SCORING_MAX_TOKENS,
            )
            data = repair_json_object(content, 'scores')
        except (CompletionServiceError, ResponseRepairError) as e:
            logger.error(f"Error scoring batch of {len(batch)} for {role.title}, using fallback scores: {e}")
            return [
                ScoredCandidate(candidate=c, score=self.neutral_score, brief_reasoning=FALLBACK_REASON, role=role.title)
                for c in batch
            ]

        by_id: Dict[str, NormalizedCandidate] = {c.id: c for c in batch}
        scored: Dict[str, ScoredCandidate] = {}

        for entry in data['scores']:
            if not isinstance(entry, dict):
                continue
            candidate_id = str(entry.get('id'))
            candidate = by_id.get(candidate_id)
            if candidate is None:
                logger.warning(f"Model scored unknown candidate {candidate_id!r} for {role.title}, ignoring")
                continue
            if candidate_id in scored:
                continue
            scored[candidate_id] = ScoredCandidate(
                candidate=candidate,
                score=_coerce_score(entry.get('score'), self.neutral_score),
                brief_reasoning=str(entry.get('reason') or ''),
                role=role.title,
            )

        missing = [c for c in batch if c.id not in scored]
        if missing:
            logger.warning(f"Model omitted {len(missing)} candidate(s) in batch for {role.title}")

        return [
            scored.get(c.id) or ScoredCandidate(
                candidate=c, score=self.neutral_score, brief_reasoning=UNSCORED_REASON, role=role.title
            )
            for c in batch
        ]
