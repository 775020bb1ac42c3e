"""
Schema Detector - infer which raw keys carry which candidate field.

Uploaded files have no fixed shape, so every key seen in a sample of the
records is classified against an ordered pattern table. The first category
whose patterns match the normalized key wins; table order is the tie-break.
"""
import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from core.exceptions import EmptySchemaError
from etl.candidates.models import DetectedSchema, RawCandidate

logger = logging.getLogger(__name__)

SAMPLE_SIZE = 50

# Ordered: earlier categories take precedence.
FIELD_PATTERNS = (
    ('name', ['name', 'fullname', 'full_name', 'candidate_name', 'applicant_name', 'candidatename']),
    ('email', ['email', 'emailaddress', 'email_address', 'mail', 'e_mail']),
    ('phone', ['phone', 'phonenumber', 'phone_number', 'mobile', 'contact', 'telephone', 'cell']),
    ('role', ['role', 'position', 'title', 'jobtitle', 'job_title', 'current_role', 'desired_role', 'designation']),
    ('experience', ['experience', 'work_experience', 'employment', 'work_history', 'job_history', 'previous_roles', 'career']),
    ('skill', ['skills', 'technical_skills', 'technologies', 'tech_stack', 'competencies', 'expertise', 'proficiencies']),
    ('education', ['education', 'academic', 'qualifications', 'degrees', 'schooling', 'university']),
    ('salary', ['salary', 'compensation', 'expected_salary', 'current_salary', 'ctc', 'package', 'pay']),
    ('location', ['location', 'city', 'address', 'current_location', 'residence', 'based_in', 'region']),
    ('portfolio', ['portfolio', 'website', 'personal_site', 'projects', 'github', 'linkedin', 'url', 'link']),
)

_SEPARATORS = re.compile(r'[_\s-]')


def normalize_key(key: str) -> str:
    """Lower-case a key and drop ``_``, whitespace and ``-``."""
    return _SEPARATORS.sub('', str(key).lower())


_NORMALIZED_PATTERNS = tuple(
    (category, tuple(normalize_key(p) for p in patterns))
    for category, patterns in FIELD_PATTERNS
)


def classify_key(key: str) -> Optional[str]:
    """Return the category for a raw key, or None when nothing matches."""
    normalized = normalize_key(key)
    for category, patterns in _NORMALIZED_PATTERNS:
        if any(pattern in normalized for pattern in patterns):
            return category
    return None


def _collect_keys(records: Sequence[RawCandidate]) -> List[str]:
    seen: Dict[str, None] = {}
    for record in records[:SAMPLE_SIZE]:
        if not isinstance(record, dict):
            continue
        for key in record.keys():
            seen.setdefault(key, None)
    return list(seen)


def detect_schema(records: Sequence[RawCandidate]) -> DetectedSchema:
    """Build a DetectedSchema from the first records of an upload.

    Raises:
        EmptySchemaError: if ``records`` is empty
    """
    if not records:
        raise EmptySchemaError("Cannot detect schema from empty candidate array")

    buckets: Dict[str, List[str]] = {category: [] for category, _ in FIELD_PATTERNS}
    unknown: List[str] = []

    for key in _collect_keys(records):
        category = classify_key(key)
        if category is None:
            unknown.append(key)
        else:
            buckets[category].append(key)

    schema = DetectedSchema(
        name_fields=tuple(buckets['name']),
        email_fields=tuple(buckets['email']),
        phone_fields=tuple(buckets['phone']),
        role_fields=tuple(buckets['role']),
        experience_fields=tuple(buckets['experience']),
        skill_fields=tuple(buckets['skill']),
        education_fields=tuple(buckets['education']),
        salary_fields=tuple(buckets['salary']),
        location_fields=tuple(buckets['location']),
        portfolio_fields=tuple(buckets['portfolio']),
        unknown_fields=tuple(unknown),
    )
    logger.debug(f"Detected schema: {schema.to_dict()}")
    return schema


def _is_present(value: Any) -> bool:
    return value is not None and value != ''


def extract_field_value(record: RawCandidate, fields: Iterable[str]) -> Any:
    """Return the first present value among ``fields``, else None."""
    if not isinstance(record, dict):
        return None
    for field_name in fields:
        value = record.get(field_name)
        if _is_present(value):
            return value
    return None


def extract_array_field(record: RawCandidate, fields: Iterable[str]) -> List[Any]:
    """Return the first list value among ``fields``.

    List-valued fields take precedence over string fields, so a scalar such
    as ``years_of_experience: "5 years"`` never shadows a structured
    ``experience`` array. A string value is split on commas. Returns [] when
    nothing usable is found.
    """
    if not isinstance(record, dict):
        return []
    fields = list(fields)
    for field_name in fields:
        value = record.get(field_name)
        if isinstance(value, list):
            return value
    for field_name in fields:
        value = record.get(field_name)
        if isinstance(value, str) and value.strip():
            return [v.strip() for v in value.split(',') if v.strip()]
    return []
