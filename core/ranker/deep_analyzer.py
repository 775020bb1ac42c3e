"""
Deep Analyzer - final LLM ranking of the top scored candidates for a role.
"""
import logging
import math
from typing import Any, Dict, List

from core.exceptions import CandidateNotFoundError
from core.llm.interfaces import LLMProvider
from core.llm.prompt_builder import build_deep_analysis_prompt
from core.llm.response_repair import repair_json_object
from core.query.models import RoleRequirement
from core.ranker.models import FinalSelection
from core.scorer.models import ScoredCandidate

logger = logging.getLogger(__name__)

DEEP_ANALYSIS_CAP = 50
ANALYSIS_TEMPERATURE = 0.4
ANALYSIS_MAX_TOKENS = 4000


def _string_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        return []
    return [str(v) for v in value if v is not None]


def _as_float(value: Any, default: float) -> float:
    """Finite float from model output, or ``default``."""
    if isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


class DeepAnalyzer:
    """Picks, ranks and justifies the final candidates for one role.

    Failures propagate: a response that cannot be repaired raises
    ResponseRepairError, and a selection naming a candidate outside the
    input raises CandidateNotFoundError.
    """

    def __init__(self, llm: LLMProvider, cap: int = DEEP_ANALYSIS_CAP):
        self.llm = llm
        self.cap = max(1, cap)

    def analyze(self, scored: List[ScoredCandidate], role: RoleRequirement, count: int) -> List[FinalSelection]:
        top = scored[:self.cap]
        if not top:
            return []

        logger.info(f"Deep analysis of top {len(top)} candidates for {role.title}, selecting {count}")
        content = self.llm.complete(
            build_deep_analysis_prompt([s.candidate for s in top], role, count),
            temperature=ANALYSIS_TEMPERATURE,
            max_tokens=ANALYSIS_MAX_TOKENS,
        )
        data = repair_json_object(content, 'selections')

        by_id: Dict[str, ScoredCandidate] = {s.candidate.id: s for s in top}
        selections: List[FinalSelection] = []
        for position, entry in enumerate(e for e in data['selections'] if isinstance(e, dict)):
            candidate_id = str(entry.get('id'))
            match = by_id.get(candidate_id)
            if match is None:
                raise CandidateNotFoundError(candidate_id)

            percentage = _as_float(entry.get('matchPercentage'), match.score)
            selections.append(FinalSelection(
                candidate=match.candidate,
                role=role.title,
                match_percentage=max(0.0, min(100.0, percentage)),
                rank=int(_as_float(entry.get('rank'), position + 1)),
                strengths=_string_list(entry.get('strengths')),
                concerns=_string_list(entry.get('concerns')),
                unique_qualities=_string_list(entry.get('uniqueQualities')),
                detailed_reasoning=str(entry.get('detailedReasoning') or ''),
            ))

        # stable: ties keep the model's order
        selections.sort(key=lambda s: s.rank)
        selections = selections[:count]
        for rank, selection in enumerate(selections, start=1):
            selection.rank = rank

        logger.info(f"Selected {len(selections)} candidate(s) for {role.title}")
        return selections
