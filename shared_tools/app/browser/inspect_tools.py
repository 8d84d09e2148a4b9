"""Browser sub-tools that read the page's DOM."""

from __future__ import annotations

from .action_tools import BrowserSubTool
from .html_utils import (
    add_elements_from_matching_labels,
    add_nearby_interactive_elements,
    cleaned_document,
    find_elements_with_matching_text,
    format_elements,
    summarize_interactive_elements,
)


class PageInspectTool(BrowserSubTool):
    """Full cleaned HTML of the current page, or a summary of it."""

    def execute(self, summarize: bool = False) -> str:
        self.logger.info("PageInspectTool#execute summarize=%s", summarize)
        doc = cleaned_document(self.driver.html())
        if summarize:
            return summarize_interactive_elements(doc)
        return str(doc)


class SelectorInspectTool(BrowserSubTool):
    """Elements matching a CSS selector, with ``context_size`` ancestors."""

    def execute(self, selector: str, context_size: int = 2) -> str:
        self.logger.info("SelectorInspectTool#execute selector=%r", selector)
        doc = cleaned_document(self.driver.html())
        elements = doc.select(selector)
        if not elements:
            return f"No elements found matching selector: {selector}"
        return format_elements(
            elements,
            f"Found {len(elements)} elements matching '{selector}':",
            context_size,
        )


class InspectTool(BrowserSubTool):
    """Find UI elements by their text content.

    Matches element text and descriptive attributes, follows matching
    labels to their controls, and (without a selector) adds interactive
    elements next to each match. ``selector`` narrows the matches to
    elements that also match it; context is then dropped.
    """

    def execute(self, text_content: str, selector: str | None = None, context_size: int = 2) -> str:
        self.logger.info("InspectTool#execute text_content=%r selector=%r", text_content, selector)
        doc = cleaned_document(self.driver.html())

        elements = find_elements_with_matching_text(doc, text_content)
        elements = add_elements_from_matching_labels(doc, elements)

        if selector:
            allowed = {id(el) for el in doc.select(selector)}
            elements = [el for el in elements if id(el) in allowed]
            context_size = 0
        else:
            elements = add_nearby_interactive_elements(elements)

        if not elements:
            return f"No elements found containing text: {text_content}"
        return format_elements(
            elements,
            f"Found {len(elements)} elements containing '{text_content}':",
            context_size,
        )
