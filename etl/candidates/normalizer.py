"""
Candidate Normalizer - project raw records into NormalizedCandidate.

Every extraction here is total: absent or oddly-typed values degrade to
None or an empty collection, never to an exception. Given the same
(record, schema, index) the output is identical across calls.
"""
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from etl.candidates.models import (
    DetectedSchema,
    EducationItem,
    ExperienceItem,
    NormalizedCandidate,
    RawCandidate,
    Salary,
)
from etl.candidates.schema_detector import extract_array_field, extract_field_value
from etl.candidates.years_extractor import YearsExtractor

logger = logging.getLogger(__name__)

SKILL_SEPARATORS = re.compile(r'[,;|]')
INTEGER_PATTERN = re.compile(r'\d+')

DIRECT_YEARS_KEYS = ('years_of_experience', 'yearsOfExperience', 'experience_years', 'totalExperience', 'yoe')
SUMMARY_KEYS = ('summary', 'bio', 'about', 'description')
GITHUB_KEYS = ('github', 'githubUrl')
LINKEDIN_KEYS = ('linkedin', 'linkedinUrl')
PORTFOLIO_KEYS = ('portfolio', 'website', 'personalWebsite')

NO_SUMMARY = "No summary available"


def _first(mapping: Dict[str, Any], keys: Iterable[str]) -> Any:
    """First truthy value among ``keys`` of a mapping."""
    for key in keys:
        value = mapping.get(key)
        if value:
            return value
    return None


def _as_text(value: Any) -> Optional[str]:
    if value is None or value == '':
        return None
    return str(value)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        match = INTEGER_PATTERN.search(value)
        if match:
            return int(match.group(0))
    return None


def _split_skill_text(text: str) -> List[str]:
    return [part.strip() for part in SKILL_SEPARATORS.split(text) if part.strip()]


class CandidateNormalizer:
    """Normalizes raw candidate records against a detected schema."""

    def __init__(self, years_extractor: Optional[YearsExtractor] = None):
        self.years = years_extractor or YearsExtractor()

    def normalize(self, raw: RawCandidate, schema: DetectedSchema, index: int) -> NormalizedCandidate:
        """Normalize one record. ``index`` is its position in the upload."""
        if not isinstance(raw, dict):
            raw = {}

        declared_id = raw.get('id')
        candidate_id = str(declared_id) if _as_text(declared_id) else f"candidate_{index}"

        name = extract_field_value(raw, schema.name_fields) or f"Candidate {index}"
        email = extract_field_value(raw, schema.email_fields) or ''
        phone = extract_field_value(raw, schema.phone_fields)
        role = extract_field_value(raw, schema.role_fields)
        location = extract_field_value(raw, schema.location_fields)

        experience, years_of_experience = self.extract_experience(raw, schema)
        links = self.extract_links(raw, schema)

        return NormalizedCandidate(
            id=candidate_id,
            name=str(name),
            email=str(email),
            phone=_as_text(phone),
            role=_as_text(role),
            years_of_experience=years_of_experience,
            skills=self.extract_skills(raw, schema),
            experience=experience,
            education=self.extract_education(raw, schema),
            salary=self.extract_salary(raw, schema),
            location=_as_text(location),
            portfolio=links.get('portfolio'),
            github=links.get('github'),
            linkedin=links.get('linkedin'),
            summary=self.generate_summary(raw, schema),
            raw_data=raw,
        )

    def normalize_all(self, records: Sequence[RawCandidate], schema: DetectedSchema) -> List[NormalizedCandidate]:
        """Normalize an upload, keeping ids unique within it.

        Non-object entries are skipped; placeholder ids and names use each
        record's position in the original upload.
        """
        candidates = []
        seen_ids = set()
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                logger.warning(f"Skipping non-object record at position {index}")
                continue
            candidate = self.normalize(record, schema, index)
            if candidate.id in seen_ids:
                logger.warning(f"Duplicate candidate id {candidate.id!r} at position {index}, suffixing")
                candidate.id = f"{candidate.id}_{index}"
            seen_ids.add(candidate.id)
            candidates.append(candidate)
        logger.info(f"Normalized {len(candidates)} candidates")
        return candidates

    # ------------------------------------------------------------------
    # Field derivations
    # ------------------------------------------------------------------

    def extract_skills(self, raw: RawCandidate, schema: DetectedSchema) -> List[str]:
        """Skills from the skills fields plus technologies inside experience entries."""
        skills: Dict[str, None] = {}

        def add(value: str) -> None:
            value = value.strip()
            if value:
                skills.setdefault(value, None)

        for skill in extract_array_field(raw, schema.skill_fields):
            if isinstance(skill, str):
                for part in _split_skill_text(skill):
                    add(part)
            elif isinstance(skill, dict):
                skill_name = _first(skill, ('name', 'skill', 'technology'))
                if skill_name:
                    add(str(skill_name))

        for entry in extract_array_field(raw, schema.experience_fields):
            if not isinstance(entry, dict):
                continue
            techs = _first(entry, ('technologies', 'tech_stack', 'skills'))
            if isinstance(techs, list):
                for tech in techs:
                    if isinstance(tech, str):
                        add(tech)
            elif isinstance(techs, str):
                for part in _split_skill_text(techs):
                    add(part)

        return list(skills)

    def extract_experience(self, raw: RawCandidate, schema: DetectedSchema):
        """Structured experience entries and the derived total years."""
        experience: List[ExperienceItem] = []
        total_years = 0.0

        for entry in extract_array_field(raw, schema.experience_fields):
            if not isinstance(entry, dict):
                continue

            technologies = entry.get('technologies')
            if isinstance(technologies, list):
                technologies = [str(t).strip() for t in technologies if _as_text(t)]
            elif isinstance(technologies, str):
                technologies = [t.strip() for t in technologies.split(',') if t.strip()]
            else:
                technologies = []

            item = ExperienceItem(
                company=_as_text(_first(entry, ('company', 'organization', 'employer'))),
                role=_as_text(_first(entry, ('role', 'title', 'position'))),
                duration=_as_text(_first(entry, ('duration', 'period'))),
                description=_as_text(_first(entry, ('description', 'responsibilities'))),
                start_date=_as_text(_first(entry, ('start_date', 'from', 'startDate'))),
                end_date=_as_text(_first(entry, ('end_date', 'to', 'endDate'))) or 'Present',
                technologies=technologies,
            )
            experience.append(item)

            years = None
            if item.start_date:
                years = self.years.years_between(item.start_date, item.end_date)
            if not years:
                years = self.years.years_from_duration(item.duration)
            if years:
                total_years += years

        if total_years == 0:
            direct = self.years.years_from_value(_first(raw, DIRECT_YEARS_KEYS))
            if direct:
                total_years = direct

        return experience, round(total_years, 1)

    def extract_education(self, raw: RawCandidate, schema: DetectedSchema) -> List[EducationItem]:
        education = []
        for entry in extract_array_field(raw, schema.education_fields):
            if isinstance(entry, dict):
                education.append(EducationItem(
                    institution=_as_text(_first(entry, ('institution', 'school', 'university', 'college'))),
                    degree=_as_text(_first(entry, ('degree', 'qualification'))),
                    field=_as_text(_first(entry, ('field', 'major', 'specialization'))),
                    year=_as_text(_first(entry, ('year', 'graduation_year', 'graduationYear'))),
                    gpa=_as_text(_first(entry, ('gpa', 'grade'))),
                ))
            elif isinstance(entry, str):
                education.append(EducationItem(institution=entry))
        return education

    def extract_salary(self, raw: RawCandidate, schema: DetectedSchema) -> Optional[Salary]:
        """Salary from a number, an object or a string."""
        value = extract_field_value(raw, schema.salary_fields)
        if value is None or value is False:
            return None

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return Salary(expected=value)

        if isinstance(value, dict):
            return Salary(
                current=_as_number(_first(value, ('current', 'current_salary'))),
                expected=_as_number(_first(value, ('expected', 'expected_salary'))),
                currency=_as_text(value.get('currency')) or 'USD',
            )

        if isinstance(value, str):
            match = INTEGER_PATTERN.search(value)
            if match:
                return Salary(expected=int(match.group(0)))

        return None

    def extract_links(self, raw: RawCandidate, schema: DetectedSchema) -> Dict[str, str]:
        """Portfolio, GitHub and LinkedIn links; direct fields win over scanned URLs."""
        links: Dict[str, str] = {}

        for key, direct_keys in (('github', GITHUB_KEYS), ('linkedin', LINKEDIN_KEYS), ('portfolio', PORTFOLIO_KEYS)):
            value = _first(raw, direct_keys)
            if isinstance(value, str):
                links[key] = value

        for item in extract_array_field(raw, schema.portfolio_fields):
            if isinstance(item, str):
                url = item
            elif isinstance(item, dict):
                url = _first(item, ('url', 'link'))
            else:
                url = None
            if not isinstance(url, str) or not url:
                continue

            if 'github.com' in url:
                links.setdefault('github', url)
            elif 'linkedin.com' in url:
                links.setdefault('linkedin', url)
            else:
                links.setdefault('portfolio', url)

        return links

    def generate_summary(self, raw: RawCandidate, schema: DetectedSchema) -> str:
        summary = _first(raw, SUMMARY_KEYS)
        if summary:
            return str(summary)

        parts = []
        role = extract_field_value(raw, schema.role_fields)
        location = extract_field_value(raw, schema.location_fields)
        if role:
            parts.append(str(role))
        if location:
            parts.append(f"based in {location}")

        return ' '.join(parts) or NO_SUMMARY


def normalize_candidates(records: Sequence[RawCandidate], schema: DetectedSchema) -> List[NormalizedCandidate]:
    """Convenience wrapper around CandidateNormalizer.normalize_all."""
    return CandidateNormalizer().normalize_all(records, schema)
