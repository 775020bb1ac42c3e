"""
Prompt Builder - render candidate pools and role requirements into prompts.
"""
import json
from typing import List

from core.filter.rule_filter import calculate_seniority_level, score_skill_match
from core.llm.system_prompts import BATCH_SCORING_PROMPT, DEEP_ANALYSIS_PROMPT, QUERY_PARSE_PROMPT
from core.query.models import RoleRequirement
from etl.candidates.models import NormalizedCandidate

MAX_SCORING_SKILLS = 15
MAX_SCORING_SUMMARY_CHARS = 200


def build_query_parse_prompt(query: str) -> str:
    return QUERY_PARSE_PROMPT.format(query=query)


def _requirement_lines(role: RoleRequirement, include_soft_criteria: bool) -> str:
    lines = [f"- Role: {role.title}"] if include_soft_criteria else []
    lines += [
        f"- Seniority: {role.seniority}",
        f"- Must-have skills: {', '.join(role.must_have_skills)}",
        f"- Nice-to-have skills: {', '.join(role.nice_to_have_skills)}",
    ]
    if role.min_years_experience:
        lines.append(f"- Minimum experience: {role.min_years_experience} years")
    if role.max_years_experience and not include_soft_criteria:
        lines.append(f"- Maximum experience: {role.max_years_experience} years")
    if role.location:
        lines.append(f"- Location: {role.location}")
    if include_soft_criteria:
        lines.append(f"- Soft criteria: {', '.join(role.soft_criteria)}")
    return '\n'.join(lines)


def build_batch_scoring_prompt(candidates: List[NormalizedCandidate], role: RoleRequirement) -> str:
    """Compact candidate summaries for coarse scoring."""
    summaries = [
        {
            'id': c.id,
            'name': c.name,
            'role': c.role or 'Not specified',
            'experience': c.years_of_experience or 0,
            'seniority': calculate_seniority_level(c.years_of_experience),
            'mustHaveCoverage': round(score_skill_match(c.skills, role.must_have_skills), 2),
            'skills': ', '.join(c.skills[:MAX_SCORING_SKILLS]),
            'summary': (c.summary or 'No summary')[:MAX_SCORING_SUMMARY_CHARS],
        }
        for c in candidates
    ]
    return BATCH_SCORING_PROMPT.format(
        candidate_count=len(candidates),
        title=role.title,
        requirements=_requirement_lines(role, include_soft_criteria=False),
        candidates=json.dumps(summaries, indent=2, ensure_ascii=False),
    )


def build_deep_analysis_prompt(candidates: List[NormalizedCandidate], role: RoleRequirement, count: int) -> str:
    """Full candidate details for the final ranking."""
    details = [
        {
            'id': c.id,
            'name': c.name,
            'email': c.email,
            'role': c.role or 'Not specified',
            'yearsOfExperience': c.years_of_experience or 0,
            'skills': ', '.join(c.skills),
            'experience': '; '.join(
                f"{e.role} at {e.company} ({e.duration or 'duration unknown'})" for e in c.experience
            ),
            'education': '; '.join(f"{e.degree} from {e.institution}" for e in c.education),
            'summary': c.summary,
            'portfolio': c.portfolio,
            'github': c.github,
            'linkedin': c.linkedin,
        }
        for c in candidates
    ]
    return DEEP_ANALYSIS_PROMPT.format(
        count=count,
        title=role.title,
        candidate_count=len(candidates),
        requirements=_requirement_lines(role, include_soft_criteria=True),
        candidates=json.dumps(details, indent=2, ensure_ascii=False),
    )
