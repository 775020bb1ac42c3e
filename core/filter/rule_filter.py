"""
Rule-Based Filter - cheap, deterministic pre-filter ahead of LLM scoring.

Deliberately high-recall: skill overlap is a lenient substring match, the
experience window and salary ceiling carry slack, and a role with no
constraints passes the whole pool through.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from core.query.models import RoleRequirement
from etl.candidates.models import NormalizedCandidate

DEFAULT_GENERIC_TECH_VOCABULARY = (
    'javascript', 'python', 'react', 'node', 'java', 'develop', 'code', 'program',
)

GENERIC_ROLE_TERMS = ('develop', 'code', 'program')

MIN_EXPERIENCE_SLACK = 1.0
MAX_EXPERIENCE_SLACK = 2.0
SALARY_SLACK = 0.2


@dataclass(frozen=True)
class FilterCriteria:
    skills: List[str] = field(default_factory=list)
    min_experience: Optional[float] = None
    max_experience: Optional[float] = None
    salary_max: Optional[float] = None

    @classmethod
    def from_role(cls, role: RoleRequirement) -> "FilterCriteria":
        return cls(
            skills=list(role.must_have_skills),
            min_experience=role.min_years_experience,
            max_experience=role.max_years_experience,
            salary_max=role.salary_range.max if role.salary_range else None,
        )

    @property
    def is_unconstrained(self) -> bool:
        return (
            not self.skills
            and self.min_experience is None
            and self.max_experience is None
            and not self.salary_max
        )


@dataclass(frozen=True)
class FilterPolicy:
    """Tunable slack and the generic technology vocabulary."""
    generic_tech_vocabulary: Sequence[str] = DEFAULT_GENERIC_TECH_VOCABULARY
    min_experience_slack: float = MIN_EXPERIENCE_SLACK
    max_experience_slack: float = MAX_EXPERIENCE_SLACK
    salary_slack: float = SALARY_SLACK


def _overlaps(candidate_skills: List[str], required_skills: List[str]) -> bool:
    return any(
        required in skill or skill in required
        for required in required_skills
        for skill in candidate_skills
    )


def _passes_skills(candidate: NormalizedCandidate, required_skills: List[str], policy: FilterPolicy) -> bool:
    candidate_skills = [s.lower() for s in candidate.skills if s]
    required = [s.lower() for s in required_skills if s]
    if not required:
        return True

    if _overlaps(candidate_skills, required):
        return True

    if any(term in skill for skill in required for term in GENERIC_ROLE_TERMS):
        vocabulary = [v.lower() for v in policy.generic_tech_vocabulary]
        return any(term in skill for skill in candidate_skills for term in vocabulary)

    return False


def _passes_experience(candidate: NormalizedCandidate, criteria: FilterCriteria, policy: FilterPolicy) -> bool:
    years = candidate.years_of_experience
    if years is None:
        return True
    if criteria.min_experience is not None and years < criteria.min_experience - policy.min_experience_slack:
        return False
    if criteria.max_experience is not None and years > criteria.max_experience + policy.max_experience_slack:
        return False
    return True


def _passes_salary(candidate: NormalizedCandidate, criteria: FilterCriteria, policy: FilterPolicy) -> bool:
    if not criteria.salary_max or candidate.salary is None or candidate.salary.expected is None:
        return True
    return candidate.salary.expected <= criteria.salary_max * (1 + policy.salary_slack)


def apply_rule_based_filter(
    candidates: List[NormalizedCandidate],
    criteria: FilterCriteria,
    policy: Optional[FilterPolicy] = None,
) -> List[NormalizedCandidate]:
    """Return the candidates that pass every present constraint.

    The input list is never mutated; an unconstrained criteria returns a
    shallow copy of the pool.
    """
    policy = policy or FilterPolicy()
    if criteria.is_unconstrained:
        return list(candidates)

    return [
        candidate for candidate in candidates
        if _passes_skills(candidate, criteria.skills, policy)
        and _passes_experience(candidate, criteria, policy)
        and _passes_salary(candidate, criteria, policy)
    ]


def score_skill_match(candidate_skills: List[str], required_skills: List[str]) -> float:
    """Fraction of required skills overlapped by the candidate's skills."""
    if not required_skills:
        return 1.0
    candidate = [s.lower() for s in candidate_skills]
    matches = sum(1 for required in required_skills if _overlaps(candidate, [required.lower()]))
    return matches / len(required_skills)


def calculate_seniority_level(years_of_experience: Optional[float]) -> str:
    if not years_of_experience:
        return 'unknown'
    if years_of_experience < 2:
        return 'junior'
    if years_of_experience < 5:
        return 'mid'
    if years_of_experience < 8:
        return 'senior'
    return 'lead'
