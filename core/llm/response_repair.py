"""
Response Repair - recover JSON from free-form completion output.

Models frequently wrap JSON in markdown fences, sprinkle emphasis markers
through it or leave trailing commas. Repair runs as an ordered list of
stages; each stage applies one or more passes to the previous stage's
output and then attempts a parse. Every pass is a total, idempotent
``str -> str`` function so it can be tested on its own.
"""
import json
import logging
import re
from typing import Any, Callable, List, Sequence, Tuple

from core.exceptions import ResponseRepairError

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 200

RepairPass = Callable[[str], str]

_FENCE_RE = re.compile(r'```[\w-]*[ \t]*\r?\n?([\s\S]*?)\s*```')

_MARKDOWN_RULES: Sequence[Tuple[re.Pattern, str]] = (
    (re.compile(r'\*\*(.*?)\*\*', re.S), r'\1'),
    (re.compile(r'\*(.*?)\*', re.S), r'\1'),
    (re.compile(r'`(.*?)`', re.S), r'\1'),
    (re.compile(r'__(.*?)__', re.S), r'\1'),
    (re.compile(r'~~(.*?)~~', re.S), r'\1'),
    (re.compile(r'!\[([^\]]*)\]\([^)]*\)'), r'\1'),
    (re.compile(r'\[([^\]]*)\]\([^)]*\)'), r'\1'),
    (re.compile(r'^[ \t]*#{1,6}[ \t]+', re.M), ''),
    (re.compile(r'^[ \t]*>[ \t]?', re.M), ''),
    (re.compile(r'^[ \t]*[-*_]{3,}[ \t]*$', re.M), ''),
)

_CONTROL_RE = re.compile(r'[\u0000-\u001F\u007F-\u009F]+')
_TRAILING_COMMA_RE = re.compile(r',\s*([}\]])')
_WHITESPACE_RE = re.compile(r'\s+')


def strip_code_fence(text: str) -> str:
    """Return the body of the first fenced block, or the text unchanged."""
    match = _FENCE_RE.search(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def strip_markdown(text: str) -> str:
    """Remove emphasis, inline code, links, images, headers, quotes and rules."""
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text


def collapse_control_characters(text: str) -> str:
    """Replace control characters (line breaks included) with single spaces."""
    return _CONTROL_RE.sub(' ', text)


def remove_trailing_commas(text: str) -> str:
    return _TRAILING_COMMA_RE.sub(r'\1', text)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(' ', text).strip()


def trim_to_braces(text: str) -> str:
    """Cut the text down to the span between the first '{' and the last '}'."""
    if text.startswith('{') and text.endswith('}'):
        return text
    start = text.find('{')
    end = text.rfind('}')
    if start == -1 or end <= start:
        return text
    return text[start:end + 1]


# Applied cumulatively; a parse is attempted after each stage.
REPAIR_STAGES: List[Tuple[str, Sequence[RepairPass]]] = [
    ('direct', ()),
    ('cleaned', (strip_markdown, collapse_control_characters, remove_trailing_commas, collapse_whitespace)),
    ('braces', (trim_to_braces,)),
]


def repair_json(text: str) -> Any:
    """Decode JSON from model output, repairing it when needed.

    Raises:
        ResponseRepairError: when no stage yields valid JSON
    """
    if text is None:
        raise ResponseRepairError("Completion returned no content")

    content = strip_code_fence(str(text))
    last_error = None

    for stage_name, passes in REPAIR_STAGES:
        for repair_pass in passes:
            content = repair_pass(content)
        try:
            data = json.loads(content)
            if stage_name != 'direct':
                logger.info(f"Recovered JSON from model output after '{stage_name}' repair stage")
            return data
        except json.JSONDecodeError as e:
            last_error = e
            logger.debug(f"JSON parse failed at stage '{stage_name}': {e}")

    excerpt = content[:EXCERPT_LENGTH]
    logger.error(f"Could not repair model output: {last_error}. Content preview: {excerpt!r}")
    raise ResponseRepairError(f"Could not parse model output as JSON: {last_error}", excerpt=excerpt)


def repair_json_object(text: str, required_key: str) -> dict:
    """Repair model output and require a JSON object holding ``required_key`` as a list.

    Raises:
        ResponseRepairError: when the shape is wrong
    """
    data = repair_json(text)
    if not isinstance(data, dict) or not isinstance(data.get(required_key), list):
        excerpt = str(text)[:EXCERPT_LENGTH]
        raise ResponseRepairError(f"Model output has no '{required_key}' array", excerpt=excerpt)
    return data
