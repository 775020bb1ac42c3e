from dataclasses import dataclass
from typing import List, Optional, Union
import logging
import time

from etl.candidates.loader import UploadStats, hash_content, parse_candidate_json, validate_candidates
from etl.candidates.models import DetectedSchema, NormalizedCandidate
from etl.candidates.normalizer import CandidateNormalizer
from etl.candidates.schema_detector import detect_schema

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    """A decoded, validated and normalized candidate file."""
    candidates: List[NormalizedCandidate]
    schema: DetectedSchema
    stats: UploadStats
    file_hash: str


class CandidateETLService:
    """Turns uploaded file content into a normalized candidate pool.

    Usage:
        service = CandidateETLService()
        result = service.ingest(file_bytes)
    """

    def __init__(self, normalizer: Optional[CandidateNormalizer] = None):
        self.normalizer = normalizer or CandidateNormalizer()

    def ingest(self, content: Union[str, bytes]) -> IngestResult:
        """Parse, validate, detect the schema of and normalize a candidate file.

        Raises:
            InvalidCandidateDataError: when the content is not a usable candidate array
        """
        start = time.time()
        records = parse_candidate_json(content)
        stats = validate_candidates(records)

        # Non-object entries past the first are skipped rather than rejected
        schema = detect_schema(records)
        candidates = self.normalizer.normalize_all(records, schema)

        logger.info(
            f"Ingested {len(candidates)} candidates ({stats.with_email} with email, "
            f"{stats.with_name} with name) in {time.time() - start:.2f}s"
        )
        return IngestResult(
            candidates=candidates,
            schema=schema,
            stats=stats,
            file_hash=hash_content(content),
        )
