"""
Thin HTML query layer over BeautifulSoup.

Selector syntax errors never escape: a bad selector is logged and treated
as matching nothing.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Comment, Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)

PARSER = "html.parser"


def parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", PARSER)


def select(node: Tag, selector: str) -> list[Tag]:
    """All elements under ``node`` matching ``selector``."""
    try:
        return list(node.select(selector))
    except (SelectorSyntaxError, NotImplementedError, ValueError) as e:
        logger.debug(f"Ignoring malformed selector {selector!r}: {e}")
        return []


def select_one(node: Tag, selector: str) -> Tag | None:
    """First element under ``node`` matching ``selector``, if any."""
    matches = select(node, selector)
    return matches[0] if matches else None


def attr(node: Tag, name: str) -> str | None:
    value = node.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


def classes(node: Tag) -> list[str]:
    value = node.get("class") or []
    return value.split() if isinstance(value, str) else list(value)


def remove_comments(node: Tag) -> None:
    for comment in node.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()


def inner_html(node: Tag) -> str:
    return node.decode_contents()
