"""
Ranker Models - final shortlist entries.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from etl.candidates.models import NormalizedCandidate


@dataclass
class FinalSelection:
    """A ranked, justified pick for one role. ``rank`` is 1-based within the role."""
    candidate: NormalizedCandidate
    role: str
    match_percentage: float
    rank: int
    strengths: List[str] = field(default_factory=list)
    concerns: List[str] = field(default_factory=list)
    unique_qualities: List[str] = field(default_factory=list)
    detailed_reasoning: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'candidate': self.candidate.to_dict(),
            'role': self.role,
            'matchPercentage': self.match_percentage,
            'strengths': list(self.strengths),
            'concerns': list(self.concerns),
            'uniqueQualities': list(self.unique_qualities),
            'detailedReasoning': self.detailed_reasoning,
            'rank': self.rank,
        }
