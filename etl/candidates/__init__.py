"""Candidate ingestion - loading, schema detection and normalization."""
from etl.candidates.models import (
    DetectedSchema,
    EducationItem,
    ExperienceItem,
    NormalizedCandidate,
    RawCandidate,
    Salary,
)
from etl.candidates.loader import (
    UploadStats,
    hash_content,
    parse_candidate_json,
    validate_candidates,
)
from etl.candidates.schema_detector import (
    detect_schema,
    extract_array_field,
    extract_field_value,
)
from etl.candidates.normalizer import CandidateNormalizer, normalize_candidates
from etl.candidates.years_extractor import YearsExtractor

__all__ = [
    'DetectedSchema', 'EducationItem', 'ExperienceItem', 'NormalizedCandidate',
    'RawCandidate', 'Salary', 'UploadStats', 'hash_content', 'parse_candidate_json',
    'validate_candidates', 'detect_schema', 'extract_array_field', 'extract_field_value',
    'CandidateNormalizer', 'normalize_candidates', 'YearsExtractor',
]
