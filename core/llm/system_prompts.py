QUERY_PARSE_PROMPT = """Extract hiring requirements from this query. Return ONLY valid JSON.

Query: "{query}"

Return format:
{{
  "roles": [
    {{
      "title": "role name",
      "count": number,
      "seniority": "junior|mid|senior|lead|any",
      "mustHaveSkills": ["skill1", "skill2"],
      "niceToHaveSkills": ["skill3"],
      "minYearsExperience": number or null,
      "maxYearsExperience": number or null,
      "salaryRange": {{"min": number, "max": number, "currency": "USD"}} or null,
      "location": "city or remote" or null,
      "softCriteria": ["criterion1"]
    }}
  ]
}}
"""

BATCH_SCORING_PROMPT = """You are evaluating {candidate_count} candidates for a {title} position.

Requirements:
{requirements}

Candidates:
{candidates}

Score each candidate 0-100 based on role fit. Return ONLY valid JSON with no markdown formatting:
{{
  "scores": [
    {{"id": "candidate_id", "score": 85, "reason": "One sentence why"}},
    ...
  ]
}}
"""

DEEP_ANALYSIS_PROMPT = """You are selecting the top {count} candidates for a {title} position from {candidate_count} finalists.

Requirements:
{requirements}

Candidates:
{candidates}

Select the best {count} candidates with detailed analysis. Use only the candidate ids listed above and rank them 1 to {count}. Return ONLY valid JSON with no markdown formatting:
{{
  "selections": [
    {{
      "id": "candidate_id",
      "rank": 1,
      "matchPercentage": 95,
      "strengths": ["strength1", "strength2", "strength3"],
      "concerns": ["concern1", "concern2"],
      "uniqueQualities": ["quality1", "quality2"],
      "detailedReasoning": "Comprehensive 2-3 sentence explanation of why this candidate is the right choice"
    }},
    ...
  ]
}}
"""
