"""
Candidate Models - canonical shapes produced by the ingestion stage.

Fields use snake_case in Python; ``to_dict()`` emits the camelCase wire
shape consumed by the web layer and the progress stream.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


RawCandidate = Dict[str, Any]


@dataclass(frozen=True)
class DetectedSchema:
    """Source keys grouped by semantic category, detected once per upload."""
    name_fields: Tuple[str, ...] = ()
    email_fields: Tuple[str, ...] = ()
    phone_fields: Tuple[str, ...] = ()
    role_fields: Tuple[str, ...] = ()
    experience_fields: Tuple[str, ...] = ()
    skill_fields: Tuple[str, ...] = ()
    education_fields: Tuple[str, ...] = ()
    salary_fields: Tuple[str, ...] = ()
    location_fields: Tuple[str, ...] = ()
    portfolio_fields: Tuple[str, ...] = ()
    unknown_fields: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            'nameFields': list(self.name_fields),
            'emailFields': list(self.email_fields),
            'phoneFields': list(self.phone_fields),
            'roleFields': list(self.role_fields),
            'experienceFields': list(self.experience_fields),
            'skillFields': list(self.skill_fields),
            'educationFields': list(self.education_fields),
            'salaryFields': list(self.salary_fields),
            'locationFields': list(self.location_fields),
            'portfolioFields': list(self.portfolio_fields),
            'unknownFields': list(self.unknown_fields),
        }


@dataclass
class ExperienceItem:
    """One entry of a candidate's work history."""
    company: Optional[str] = None
    role: Optional[str] = None
    duration: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    technologies: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'company': self.company,
            'role': self.role,
            'duration': self.duration,
            'description': self.description,
            'startDate': self.start_date,
            'endDate': self.end_date,
            'technologies': list(self.technologies),
        }


@dataclass
class EducationItem:
    institution: Optional[str] = None
    degree: Optional[str] = None
    field: Optional[str] = None
    year: Optional[str] = None
    gpa: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'institution': self.institution,
            'degree': self.degree,
            'field': self.field,
            'year': self.year,
            'gpa': self.gpa,
        }


@dataclass
class Salary:
    current: Optional[float] = None
    expected: Optional[float] = None
    currency: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'current': self.current,
            'expected': self.expected,
            'currency': self.currency,
        }


@dataclass
class NormalizedCandidate:
    """Canonical candidate record used by every pipeline stage."""
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: Optional[str] = None
    years_of_experience: float = 0.0
    skills: List[str] = field(default_factory=list)
    experience: List[ExperienceItem] = field(default_factory=list)
    education: List[EducationItem] = field(default_factory=list)
    salary: Optional[Salary] = None
    location: Optional[str] = None
    portfolio: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    summary: str = ""
    raw_data: RawCandidate = field(default_factory=dict)

    def to_dict(self, include_raw: bool = True) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'role': self.role,
            'yearsOfExperience': self.years_of_experience,
            'skills': list(self.skills),
            'experience': [e.to_dict() for e in self.experience],
            'education': [e.to_dict() for e in self.education],
            'salary': self.salary.to_dict() if self.salary else None,
            'location': self.location,
            'portfolio': self.portfolio,
            'github': self.github,
            'linkedin': self.linkedin,
            'summary': self.summary,
        }
        if include_raw:
            data['rawData'] = self.raw_data
        return data
