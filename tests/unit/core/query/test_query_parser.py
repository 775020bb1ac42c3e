"""
Unit tests for RoleQueryParser.
"""
import json

import pytest
from unittest.mock import MagicMock

from core.exceptions import CompletionServiceError, QueryParseError
from core.query.parser import QUERY_MAX_TOKENS, QUERY_TEMPERATURE, RoleQueryParser


def _parser(content):
    llm = MagicMock()
    llm.complete.return_value = content
    return RoleQueryParser(llm), llm


class TestParse:

    def test_maps_model_payload_to_requirements(self):
        content = json.dumps({"roles": [{
            "title": "Backend Engineer",
            "count": 2,
            "seniority": "Senior",
            "mustHaveSkills": ["Node.js"],
            "niceToHaveSkills": ["GraphQL"],
            "minYearsExperience": 5,
            "maxYearsExperience": None,
            "salaryRange": {"min": 100000, "max": 150000, "currency": "USD"},
            "location": "Remote",
            "softCriteria": ["ownership"],
        }]})
        parser, llm = _parser(content)

        parsed = parser.parse("2 senior backend engineers with Node.js")

        role = parsed.roles[0]
        assert role.title == "Backend Engineer"
        assert role.count == 2
        assert role.seniority == "senior"
        assert role.must_have_skills == ["Node.js"]
        assert role.min_years_experience == 5.0
        assert role.max_years_experience is None
        assert role.salary_range.max == 150000
        assert role.location == "Remote"
        assert parsed.total_positions == 2
        llm.complete.assert_called_once()
        assert llm.complete.call_args.kwargs == {"temperature": QUERY_TEMPERATURE, "max_tokens": QUERY_MAX_TOKENS}

    def test_defaults_for_sparse_roles(self):
        parser, _ = _parser('```json\n{"roles": [{"title": "Designer"}]}\n```')

        role = parser.parse("a designer").roles[0]

        assert role.count == 1
        assert role.seniority == "any"
        assert role.must_have_skills == []
        assert role.salary_range is None

    @pytest.mark.parametrize("raw, expected", [
        ({"min": "80k", "max": "120k"}, (80000, 120000)),
        ({"min": "$90,000", "max": "1.2M"}, (90000, 1200000)),
        ({"min": "negotiable", "max": 150000}, (None, 150000)),
    ])
    def test_salary_strings_are_read_leniently(self, raw, expected):
        parser, _ = _parser(json.dumps({"roles": [{"title": "Backend Engineer", "salaryRange": raw}]}))

        salary = parser.parse("backend engineer around 100k").roles[0].salary_range

        assert (salary.min, salary.max) == expected

    def test_multiple_roles_keep_order(self):
        parser, _ = _parser(json.dumps({"roles": [
            {"title": "Frontend", "count": 1},
            {"title": "Backend", "count": 3},
        ]}))

        parsed = parser.parse("1 frontend and 3 backend")

        assert [r.title for r in parsed.roles] == ["Frontend", "Backend"]
        assert parsed.total_positions == 4

    def test_unknown_seniority_becomes_any(self):
        parser, _ = _parser('{"roles": [{"title": "X", "seniority": "principal", "count": "two"}]}')

        role = parser.parse("x").roles[0]

        assert role.seniority == "any"
        assert role.count == 1

    def test_skips_non_object_entries(self):
        parser, _ = _parser('{"roles": ["junk", {"title": "QA"}]}')
        assert [r.title for r in parser.parse("qa").roles] == ["QA"]


class TestParseFailures:

    def test_blank_query(self):
        parser, llm = _parser("{}")
        with pytest.raises(QueryParseError):
            parser.parse("   ")
        llm.complete.assert_not_called()

    def test_unrepairable_response(self):
        parser, _ = _parser("I am not sure what you mean.")
        with pytest.raises(QueryParseError):
            parser.parse("hire someone")

    def test_missing_roles_array(self):
        parser, _ = _parser('{"positions": []}')
        with pytest.raises(QueryParseError, match="roles"):
            parser.parse("hire someone")

    def test_empty_roles(self):
        parser, _ = _parser('{"roles": []}')
        with pytest.raises(QueryParseError):
            parser.parse("hire someone")

    def test_service_error_propagates(self):
        llm = MagicMock()
        llm.complete.side_effect = CompletionServiceError("Failed after 3 retries: down")
        with pytest.raises(CompletionServiceError):
            RoleQueryParser(llm).parse("hire someone")
