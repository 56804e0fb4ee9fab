"""
Path Expression Evaluator.

Extracts string values from a JSON or XML body with a JSONPath or
XPath expression. Each MimeType maps to one ExtractionStrategy:

    MimeType.APPLICATION_JSON -> jsonpath-ng
    MimeType.APPLICATION_XML  -> lxml XPath 1.0

Usage:
    document = parse_document(body, MimeType.APPLICATION_JSON)
    values = evaluate(document, "$.colors[*]", MimeType.APPLICATION_JSON)

    # Form validation, no document needed
    validate_syntax("//item/text()", MimeType.APPLICATION_XML)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from restlist.models import MimeType

from .json_path import EMPTY_DOCUMENT, compile_json_path, evaluate_json_path, parse_json
from .xpath import compile_xpath, evaluate_xpath, parse_xml


@dataclass(frozen=True, slots=True)
class ExtractionStrategy:
    """
    Parse and evaluate functions for one mime type.

    Attributes:
        expression_language: Name used in messages ("JSONPath", "XPath")
        parse: body -> document (an empty marker for a blank body)
        compile: expression -> compiled form, raises ExpressionSyntaxError
        evaluate: (document, expression) -> list of strings
    """

    expression_language: str
    parse: Callable[[str | bytes], Any]
    compile: Callable[[str], Any]
    evaluate: Callable[[Any, str], list[str]]


STRATEGIES: dict[MimeType, ExtractionStrategy] = {
    MimeType.APPLICATION_JSON: ExtractionStrategy(
        expression_language="JSONPath",
        parse=parse_json,
        compile=compile_json_path,
        evaluate=evaluate_json_path,
    ),
    MimeType.APPLICATION_XML: ExtractionStrategy(
        expression_language="XPath",
        parse=parse_xml,
        compile=compile_xpath,
        evaluate=evaluate_xpath,
    ),
}


def parse_document(body: str | bytes, mime_type: MimeType) -> Any:
    """
    Parse a body according to its declared mime type.

    Raises:
        ParseError: If the body is malformed
    """
    return mime_type.strategy.parse(body)


def validate_syntax(expression: str, mime_type: MimeType) -> None:
    """
    Check that an expression compiles for the given mime type.

    Raises:
        ExpressionSyntaxError: With the parser's message
    """
    mime_type.strategy.compile(expression)


def evaluate(document: Any, expression: str, mime_type: MimeType) -> list[str]:
    """
    Evaluate an expression against a parsed document.

    Raises:
        ExpressionSyntaxError: If the expression does not compile
        EvaluationError: If the expression cannot be applied to the document
    """
    return mime_type.strategy.evaluate(document, expression)


def extract(body: str | bytes, expression: str, mime_type: MimeType) -> list[str]:
    """Parse a body and evaluate an expression against it."""
    return evaluate(parse_document(body, mime_type), expression, mime_type)


__all__ = [
    "ExtractionStrategy",
    "STRATEGIES",
    "EMPTY_DOCUMENT",
    "parse_document",
    "validate_syntax",
    "evaluate",
    "extract",
]
