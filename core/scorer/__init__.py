"""
Scoring Module - coarse LLM scoring of pre-filtered candidates.

Public API:
- BatchScorer: splits a pool into batches and scores them in bounded waves
- ScoredCandidate: score plus brief reasoning for one candidate and role
"""

from core.scorer.batch_scorer import BatchScorer
from core.scorer.models import ScoredCandidate

__all__ = ['BatchScorer', 'ScoredCandidate']
