"""
JSONPath extraction strategy.

Uses the extended jsonpath-ng grammar so filter expressions
(`$.items[?price > 10].name`) and arithmetic work.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any

from jsonpath_ng.jsonpath import JSONPath
from jsonpath_ng.ext import parse as jsonpath_parse

from restlist.errors import EvaluationError, ExpressionSyntaxError, ParseError

logger = logging.getLogger(__name__)

# Parsed form of a blank body; a literal "null" body parses to None
EMPTY_DOCUMENT = object()


def parse_json(body: str) -> Any:
    """
    Parse a JSON body.

    Returns:
        Parsed document, or EMPTY_DOCUMENT for a blank body

    Raises:
        ParseError: If the body is not valid JSON
    """
    if not body or not body.strip():
        return EMPTY_DOCUMENT

    try:
        return json.loads(body)
    except json.JSONDecodeError as e:
        raise ParseError(f"Response is not valid JSON: {e}", detail=str(e)) from e


@lru_cache(maxsize=256)
def compile_json_path(expression: str) -> JSONPath:
    """
    Compile a JSONPath expression.

    Raises:
        ExpressionSyntaxError: If the expression does not parse
    """
    try:
        return jsonpath_parse(expression)
    except Exception as e:
        # jsonpath-ng surfaces lexer/parser failures with several exception types
        raise ExpressionSyntaxError(
            f"Invalid JSONPath expression '{expression}': {e}",
            expression=expression,
            detail=str(e),
        ) from e


def evaluate_json_path(document: Any, expression: str) -> list[str]:
    """
    Evaluate a JSONPath expression, returning matched values as strings.

    Matches keep the traversal order of jsonpath-ng. Strings are returned
    unchanged, everything else is rendered as compact JSON.
    """
    compiled = compile_json_path(expression)

    if document is EMPTY_DOCUMENT:
        return []

    try:
        matches = compiled.find(document)
    except Exception as e:
        raise EvaluationError(
            f"Could not evaluate '{expression}': {e}",
            expression=expression,
            detail=str(e),
        ) from e

    logger.debug(f"[json_path] '{expression}' matched {len(matches)} value(s)")
    return [_to_text(match.value) for match in matches]


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
