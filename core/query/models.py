"""
Query Models - structured hiring requirements parsed from free text.
"""
import re
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Seniority = Literal['junior', 'mid', 'senior', 'lead', 'any']

_AMOUNT_RE = re.compile(r'(\d[\d,]*(?:\.\d+)?)\s*(?:([km])\b)?', re.IGNORECASE)
_MULTIPLIERS = {'k': 1_000, 'm': 1_000_000}


class SalaryRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: Optional[float] = None
    max: Optional[float] = None
    currency: Optional[str] = None

    @field_validator('min', 'max', mode='before')
    @classmethod
    def _lenient_amount(cls, value):
        """Accept numbers and strings such as "80k" or "$120,000"; anything else is None."""
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)
        match = _AMOUNT_RE.search(str(value))
        if not match:
            return None
        amount = float(match.group(1).replace(',', ''))
        suffix = (match.group(2) or '').lower()
        return amount * _MULTIPLIERS.get(suffix, 1)


class RoleRequirement(BaseModel):
    """One structured hiring need. Read-only once parsed."""
    model_config = ConfigDict(frozen=True)

    title: str
    count: int = Field(default=1, ge=1)
    seniority: Seniority = 'any'
    must_have_skills: List[str] = Field(default_factory=list)
    nice_to_have_skills: List[str] = Field(default_factory=list)
    min_years_experience: Optional[float] = None
    max_years_experience: Optional[float] = None
    salary_range: Optional[SalaryRange] = None
    location: Optional[str] = None
    soft_criteria: List[str] = Field(default_factory=list)

    @field_validator('seniority', mode='before')
    @classmethod
    def _normalize_seniority(cls, value):
        if value is None:
            return 'any'
        value = str(value).strip().lower()
        return value if value in ('junior', 'mid', 'senior', 'lead') else 'any'

    @field_validator('must_have_skills', 'nice_to_have_skills', 'soft_criteria', mode='before')
    @classmethod
    def _coerce_string_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [v.strip() for v in value.split(',') if v.strip()]
        return [str(v) for v in value if v is not None and str(v).strip()]

    @field_validator('min_years_experience', 'max_years_experience', mode='before')
    @classmethod
    def _lenient_years(cls, value):
        if value is None or isinstance(value, bool):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None

    @field_validator('count', mode='before')
    @classmethod
    def _default_count(cls, value):
        try:
            value = int(value)
        except (TypeError, ValueError):
            return 1
        return value if value >= 1 else 1

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'count': self.count,
            'seniority': self.seniority,
            'mustHaveSkills': list(self.must_have_skills),
            'niceToHaveSkills': list(self.nice_to_have_skills),
            'minYearsExperience': self.min_years_experience,
            'maxYearsExperience': self.max_years_experience,
            'salaryRange': self.salary_range.model_dump() if self.salary_range else None,
            'location': self.location,
            'softCriteria': list(self.soft_criteria),
        }


class ParsedQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    original_query: str
    roles: List[RoleRequirement]

    @property
    def total_positions(self) -> int:
        return sum(role.count for role in self.roles)
