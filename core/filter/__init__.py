"""Filter Module - rule-based pre-filtering."""
from core.filter.rule_filter import (
    FilterCriteria,
    FilterPolicy,
    apply_rule_based_filter,
    calculate_seniority_level,
    score_skill_match,
)

__all__ = [
    'FilterCriteria', 'FilterPolicy', 'apply_rule_based_filter',
    'calculate_seniority_level', 'score_skill_match',
]
