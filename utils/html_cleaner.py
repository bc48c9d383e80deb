"""
HTML Cleaner Module

Sanitizes article body markup before it is sent for reformulation and
republished. Comments, scripts and style sheets are dropped, and every element
loses all of its attributes except an inline ``style`` (itself stripped of CSS
comments). Structural tags and text are kept as they are.
"""

import re

from bs4 import BeautifulSoup, Comment, Tag

CSS_COMMENT_PATTERN = re.compile(r'/\*[\s\S]*?\*/')

# Elements removed together with everything inside them
STRIPPED_ELEMENTS = ["script", "style"]

KEPT_ATTRIBUTE = "style"


def strip_css_comments(css: str) -> str:
    """Remove every /* ... */ comment from a CSS string."""
    return CSS_COMMENT_PATTERN.sub('', css)


def _clean_attributes(element: Tag) -> None:
    style = element.attrs.get(KEPT_ATTRIBUTE)
    if style is None:
        element.attrs = {}
        return
    element.attrs = {KEPT_ATTRIBUTE: strip_css_comments(style)}


def clean_html(html: str) -> str:
    """
    Clean an HTML fragment by removing unwanted attributes, script/style tags and comments.

    The transformation is idempotent: cleaning already cleaned markup returns it
    unchanged.

    Args:
        html: The HTML fragment to clean.

    Returns:
        str: The cleaned inner markup of the fragment.
    """
    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()

    # CSS comments inside <style> blocks go away with the blocks themselves
    for element in soup.find_all(STRIPPED_ELEMENTS):
        if not element.decomposed:
            element.decompose()

    stack = [child for child in soup.children if isinstance(child, Tag)]
    while stack:
        element = stack.pop()
        _clean_attributes(element)
        stack.extend(child for child in element.children if isinstance(child, Tag))

    return soup.decode()
