#!/usr/bin/env python3
"""
CSV export of final selections.

Rows are built from the wire shape of a selection (``FinalSelection.to_dict``)
so the client can post back exactly what the complete event delivered.
"""

import csv
import io
from typing import Any, Dict, List

CSV_COLUMNS = [
    'Rank', 'Name', 'Email', 'Phone', 'Role', 'Match %', 'Years Experience',
    'Skills', 'Strengths', 'Concerns', 'Unique Qualities', 'Reasoning',
    'Location', 'Portfolio', 'GitHub', 'LinkedIn',
]

MISSING = 'N/A'
LIST_SEPARATOR = '; '


def _text(value: Any) -> str:
    if value is None or value == '':
        return MISSING
    return str(value)


def _joined(value: Any) -> str:
    if not value:
        return ''
    if isinstance(value, str):
        return value
    return LIST_SEPARATOR.join(str(v) for v in value)


def selection_row(selection: Dict[str, Any]) -> List[str]:
    candidate = selection.get('candidate') or {}
    return [
        _text(selection.get('rank')),
        _text(candidate.get('name')),
        _text(candidate.get('email')),
        _text(candidate.get('phone')),
        _text(selection.get('role')),
        _text(selection.get('matchPercentage')),
        _text(candidate.get('yearsOfExperience')),
        _joined(candidate.get('skills')),
        _joined(selection.get('strengths')),
        _joined(selection.get('concerns')),
        _joined(selection.get('uniqueQualities')),
        _text(selection.get('detailedReasoning')),
        _text(candidate.get('location')),
        _text(candidate.get('portfolio')),
        _text(candidate.get('github')),
        _text(candidate.get('linkedin')),
    ]


def selections_to_csv(selections: List[Dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(CSV_COLUMNS)
    for selection in selections:
        writer.writerow(selection_row(selection))
    return buffer.getvalue()
