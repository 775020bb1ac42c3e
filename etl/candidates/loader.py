"""
Candidate file loader - decode an uploaded JSON payload into raw records.

Accepts either a top-level array of objects or an object holding one
array-valued property (preferred names first, else the first non-empty
array found).
"""
import hashlib
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Union

from core.exceptions import InvalidCandidateDataError
from etl.candidates.models import RawCandidate

logger = logging.getLogger(__name__)

PREFERRED_ARRAY_KEYS = ('candidates', 'applications', 'data', 'results', 'applicants', 'users')

NAME_HINT_KEYS = ('name', 'fullname', 'full_name', 'candidate_name', 'applicant_name')
EMAIL_HINT_KEYS = ('email', 'emailaddress', 'email_address', 'mail')


@dataclass
class UploadStats:
    """Counts reported back to the uploader."""
    total: int
    with_email: int
    with_name: int

    def to_dict(self) -> Dict[str, int]:
        return {'total': self.total, 'withEmail': self.with_email, 'withName': self.with_name}


def parse_candidate_json(content: Union[str, bytes]) -> List[RawCandidate]:
    """Decode JSON content and locate the candidate array.

    Raises:
        InvalidCandidateDataError: on invalid JSON or when no array is found
    """
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise InvalidCandidateDataError(f"File is not valid UTF-8: {e}") from e

    if not content or not content.strip():
        raise InvalidCandidateDataError("Empty file content")

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidCandidateDataError(f"Invalid JSON format: {e}") from e

    return locate_candidate_array(parsed)


def locate_candidate_array(parsed: Any) -> List[RawCandidate]:
    if isinstance(parsed, list):
        return parsed

    if isinstance(parsed, dict):
        for key in PREFERRED_ARRAY_KEYS:
            if isinstance(parsed.get(key), list):
                logger.debug(f"Using candidate array under key {key!r}")
                return parsed[key]

        for key, value in parsed.items():
            if isinstance(value, list) and value:
                logger.debug(f"Using first non-empty array under key {key!r}")
                return value

    raise InvalidCandidateDataError("Could not find candidate array in JSON structure")


def validate_candidates(records: Any) -> UploadStats:
    """Check that records form a non-empty array of objects and count hints.

    Raises:
        InvalidCandidateDataError: when the data cannot be used
    """
    if not isinstance(records, list):
        raise InvalidCandidateDataError("Candidates data must be an array")
    if not records:
        raise InvalidCandidateDataError("Candidate array is empty")
    if not isinstance(records[0], dict):
        raise InvalidCandidateDataError("Array must contain objects")

    with_name = 0
    with_email = 0
    for record in records:
        if not isinstance(record, dict):
            continue
        if any(record.get(key) for key in NAME_HINT_KEYS):
            with_name += 1
        if any(record.get(key) for key in EMAIL_HINT_KEYS):
            with_email += 1

    return UploadStats(total=len(records), with_email=with_email, with_name=with_name)


def hash_content(content: Union[str, bytes]) -> str:
    """SHA256 fingerprint of an uploaded file."""
    if isinstance(content, str):
        content = content.encode('utf-8')
    return hashlib.sha256(content).hexdigest()
