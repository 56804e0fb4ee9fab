"""
XPath extraction strategy (XPath 1.0 via lxml).

Raw bytes are parsed as-is so the XML declaration or BOM picks the
charset. Already decoded text is re-encoded as UTF-8 and parsed with the
encoding forced, since its declaration no longer describes it.

The parser never resolves external entities or touches the network.
"""

from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import Any

from lxml import etree

from restlist.errors import EvaluationError, ExpressionSyntaxError, ParseError

logger = logging.getLogger(__name__)


def _make_parser(encoding: str | None = None) -> etree.XMLParser:
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        remove_blank_text=False,
    )


def parse_xml(body: str | bytes) -> etree._ElementTree | None:
    """
    Parse an XML body.

    Args:
        body: Raw response bytes, or text that was already decoded

    Returns:
        Parsed tree, or None for an empty body

    Raises:
        ParseError: If the body is not well-formed XML
    """
    if not body or not body.strip():
        return None

    if isinstance(body, bytes):
        data, parser = body.strip(), _make_parser()
    else:
        data, parser = body.strip().encode("utf-8"), _make_parser("utf-8")

    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as e:
        raise ParseError(f"Response is not valid XML: {e}", detail=str(e)) from e
    return root.getroottree()


@lru_cache(maxsize=256)
def compile_xpath(expression: str) -> etree.XPath:
    """
    Compile an XPath expression.

    Raises:
        ExpressionSyntaxError: If the expression does not compile
    """
    try:
        return etree.XPath(expression)
    except etree.XPathError as e:
        raise ExpressionSyntaxError(
            f"Invalid XPath expression '{expression}': {e}",
            expression=expression,
            detail=str(e),
        ) from e


def evaluate_xpath(document: etree._ElementTree | None, expression: str) -> list[str]:
    """
    Evaluate an XPath expression, returning matched values as strings.

    Node-sets come back in document order: elements contribute their
    text content, text and attribute nodes their string value. Scalar
    results (count(), string(), comparisons) yield a single value.
    """
    compiled = compile_xpath(expression)

    if document is None:
        return []

    try:
        result = compiled(document)
    except etree.XPathError as e:
        raise EvaluationError(
            f"Could not evaluate '{expression}': {e}",
            expression=expression,
            detail=str(e),
        ) from e

    if isinstance(result, list):
        values = [_node_text(node) for node in result]
    else:
        values = [_scalar_text(result)]

    logger.debug(f"[xpath] '{expression}' matched {len(values)} value(s)")
    return values


def _node_text(node: Any) -> str:
    if isinstance(node, etree._Element):
        if isinstance(node.tag, str):
            return "".join(node.itertext())
        # comments and processing instructions
        return node.text or ""
    if isinstance(node, tuple):
        # namespace axis yields (prefix, uri)
        return node[1]
    return str(node)


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)
