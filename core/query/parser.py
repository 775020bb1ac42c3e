"""
Role Query Parser - turn a free-text hiring request into RoleRequirements.
"""
import logging
from typing import Any, Dict

from pydantic import ValidationError

from core.exceptions import QueryParseError, ResponseRepairError
from core.llm.interfaces import LLMProvider
from core.llm.prompt_builder import build_query_parse_prompt
from core.llm.response_repair import repair_json
from core.query.models import ParsedQuery, RoleRequirement, SalaryRange

logger = logging.getLogger(__name__)

QUERY_TEMPERATURE = 0.1
QUERY_MAX_TOKENS = 1000


def _role_from_payload(payload: Dict[str, Any]) -> RoleRequirement:
    """Map the camelCase model payload onto a RoleRequirement with defaults."""
    salary = payload.get('salaryRange')
    salary_range = None
    if isinstance(salary, dict) and (salary.get('min') is not None or salary.get('max') is not None):
        salary_range = SalaryRange(
            min=salary.get('min'),
            max=salary.get('max'),
            currency=salary.get('currency'),
        )

    return RoleRequirement(
        title=str(payload.get('title') or 'Unspecified role'),
        count=payload.get('count') or 1,
        seniority=payload.get('seniority') or 'any',
        must_have_skills=payload.get('mustHaveSkills') or [],
        nice_to_have_skills=payload.get('niceToHaveSkills') or [],
        min_years_experience=payload.get('minYearsExperience'),
        max_years_experience=payload.get('maxYearsExperience'),
        salary_range=salary_range,
        location=payload.get('location'),
        soft_criteria=payload.get('softCriteria') or [],
    )


class RoleQueryParser:
    """Parses hiring queries with one completion call each."""

    def __init__(self, llm: LLMProvider):
        self.llm = llm

    def parse(self, query: str) -> ParsedQuery:
        """
        Raises:
            QueryParseError: if the query is blank or the response has no usable roles
            CompletionServiceError: if the completion service fails
        """
        if not query or not query.strip():
            raise QueryParseError("Query is empty")

        content = self.llm.complete(
            build_query_parse_prompt(query.strip()),
            temperature=QUERY_TEMPERATURE,
            max_tokens=QUERY_MAX_TOKENS,
        )

        try:
            data = repair_json(content)
        except ResponseRepairError as e:
            raise QueryParseError(f"Could not understand the hiring request: {e}") from e

        roles_payload = data.get('roles') if isinstance(data, dict) else None
        if not isinstance(roles_payload, list):
            raise QueryParseError("Parsed query contains no 'roles' array")

        roles = []
        for payload in roles_payload:
            if not isinstance(payload, dict):
                logger.warning(f"Skipping non-object role entry: {payload!r}")
                continue
            try:
                roles.append(_role_from_payload(payload))
            except ValidationError as e:
                logger.warning(f"Skipping invalid role entry {payload!r}: {e}")

        if not roles:
            raise QueryParseError("No roles could be extracted from the hiring request")

        parsed = ParsedQuery(original_query=query, roles=roles)
        logger.info(
            f"Parsed query into {len(roles)} role(s), {parsed.total_positions} position(s): "
            f"{[role.title for role in roles]}"
        )
        return parsed
