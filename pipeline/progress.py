"""
Progress model for a selection run.

Events are plain dataclasses; ``to_dict`` produces the wire frame sent over
the progress stream and omits fields that are not set.
"""
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

PARSING_END = 5.0

# Fractions of a role's band at which each stage begins
FILTERING_START = 0.0
SCORING_START = 0.2
ANALYZING_START = 0.5
COMPLETION_START = 0.75


class ProgressStage(str, Enum):
    PARSING = 'parsing'
    FILTERING = 'filtering'
    SCORING = 'scoring'
    ANALYZING = 'analyzing'
    COMPLETE = 'complete'
    ERROR = 'error'


class ProgressLevel(str, Enum):
    INFO = 'info'
    WARNING = 'warning'
    ERROR = 'error'


@dataclass
class ProcessingProgress:
    stage: ProgressStage
    message: str
    percentage: float
    level: ProgressLevel = ProgressLevel.INFO
    role: Optional[str] = None
    candidates_processed: Optional[int] = None
    total_candidates: Optional[int] = None
    current_batch: Optional[int] = None
    total_batches: Optional[int] = None
    results: Optional[List[Dict[str, Any]]] = None

    _WIRE_NAMES = {
        'candidates_processed': 'candidatesProcessed',
        'total_candidates': 'totalCandidates',
        'current_batch': 'currentBatch',
        'total_batches': 'totalBatches',
    }

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif f.name == 'percentage':
                value = round(value, 1)
            data[self._WIRE_NAMES.get(f.name, f.name)] = value
        return data


ProgressCallback = Callable[[ProcessingProgress], None]


@dataclass(frozen=True)
class RoleBand:
    """The slice of the 5-100% range owned by one role."""
    start: float
    width: float

    @classmethod
    def for_role(cls, role_index: int, role_count: int) -> "RoleBand":
        width = (100.0 - PARSING_END) / max(1, role_count)
        return cls(start=PARSING_END + role_index * width, width=width)

    def at(self, fraction: float) -> float:
        fraction = max(0.0, min(1.0, fraction))
        return min(100.0, self.start + self.width * fraction)

    def scoring(self, batch_number: int, total_batches: int) -> float:
        done = (batch_number - 1) / max(1, total_batches)
        return self.at(SCORING_START + (ANALYZING_START - SCORING_START) * done)
