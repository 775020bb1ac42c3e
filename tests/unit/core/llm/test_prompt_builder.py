"""
Unit tests for prompt rendering.
"""
import json

from core.llm.prompt_builder import (
    MAX_SCORING_SKILLS,
    build_batch_scoring_prompt,
    build_deep_analysis_prompt,
    build_query_parse_prompt,
)


def _embedded_candidates(prompt):
    start = prompt.index("Candidates:\n") + len("Candidates:\n")
    end = prompt.index("\n\n", start)
    return json.loads(prompt[start:end])


def test_query_prompt_embeds_query():
    prompt = build_query_parse_prompt("2 senior Go engineers")
    assert '"2 senior Go engineers"' in prompt
    assert '"roles"' in prompt


def test_scoring_prompt_summarizes_candidates(make_candidate, make_role):
    skills = [f"skill{i}" for i in range(MAX_SCORING_SKILLS + 5)] + ["Node.js"]
    candidate = make_candidate("c1", skills=skills, years=6, summary="x" * 500)
    role = make_role(must_have_skills=["Node.js", "GraphQL"], max_years_experience=10)

    prompt = build_batch_scoring_prompt([candidate], role)
    [summary] = _embedded_candidates(prompt)

    assert "1 candidates for a Backend Engineer position" in prompt
    assert "- Maximum experience: 10.0 years" in prompt
    assert summary["id"] == "c1"
    assert summary["seniority"] == "senior"
    assert summary["mustHaveCoverage"] == 0.5
    assert len(summary["skills"].split(", ")) == MAX_SCORING_SKILLS
    assert len(summary["summary"]) == 200


def test_analysis_prompt_includes_soft_criteria(make_candidate, make_role):
    candidate = make_candidate("c9", skills=["Rust"], github="https://github.com/c9")
    role = make_role(count=2, soft_criteria=["Mentors juniors"])

    prompt = build_deep_analysis_prompt([candidate], role, role.count)
    [detail] = _embedded_candidates(prompt)

    assert "top 2 candidates for a Backend Engineer position from 1 finalists" in prompt
    assert "- Soft criteria: Mentors juniors" in prompt
    assert detail["github"] == "https://github.com/c9"
