"""
Scorer Models - output of the batch scoring stage.
"""
from dataclasses import dataclass
from typing import Any, Dict

from etl.candidates.models import NormalizedCandidate


@dataclass
class ScoredCandidate:
    """Coarse fit score for one candidate against one role."""
    candidate: NormalizedCandidate
    score: float
    brief_reasoning: str
    role: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'candidate': self.candidate.to_dict(include_raw=False),
            'score': self.score,
            'briefReasoning': self.brief_reasoning,
            'role': self.role,
        }
