"""HTML helpers for the inspect sub-tools (BeautifulSoup based)."""

from __future__ import annotations

from bs4 import BeautifulSoup, Comment, Tag

_STRIP_TAGS = ["script", "style", "noscript", "svg", "meta", "link", "iframe", "template"]
_KEEP_ATTRS = {
    "id", "class", "name", "type", "href", "src", "alt", "title", "role", "for",
    "value", "placeholder", "action", "method", "aria-label", "checked", "selected",
}
INTERACTIVE_TAGS = ["a", "button", "input", "select", "textarea"]
_TEXT_ATTRS = ("placeholder", "value", "aria-label", "title", "alt")

_MAX_SUMMARY_ITEMS = 50
_MAX_ELEMENT_CHARS = 1500


def cleaned_document(html: str) -> BeautifulSoup:
    """Parse HTML and drop scripts, styles, comments and noisy attributes."""
    soup = BeautifulSoup(html or "", "html.parser")
    for tag in soup.find_all(_STRIP_TAGS):
        tag.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    for tag in soup.find_all(True):
        tag.attrs = {
            k: v for k, v in tag.attrs.items()
            if k in _KEEP_ATTRS or k.startswith("data-")
        }
    return soup


def opening_tag(tag: Tag) -> str:
    """Render ``<tag attr="...">`` without children."""
    attrs = []
    for key, value in tag.attrs.items():
        if isinstance(value, list):
            value = " ".join(value)
        attrs.append(f'{key}="{value}"')
    return "<" + " ".join([tag.name, *attrs]) + ">"


def _truncate(text: str, limit: int = _MAX_ELEMENT_CHARS) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


# ---------------------------------------------------------------------------
# Page summary
# ---------------------------------------------------------------------------

def summarize_interactive_elements(soup: BeautifulSoup) -> str:
    """Summarize the title, headings and interactive elements of a page."""
    lines: list[str] = []

    title = soup.title.get_text(strip=True) if soup.title else ""
    lines.append(f"Title: {title or '(none)'}")

    headings = soup.find_all(["h1", "h2", "h3"])
    if headings:
        lines.append("")
        lines.append(f"Headings ({len(headings)}):")
        for h in headings[:_MAX_SUMMARY_ITEMS]:
            lines.append(f"  {h.name}: {h.get_text(' ', strip=True)}")

    links = soup.find_all("a")
    if links:
        lines.append("")
        lines.append(f"Links ({len(links)}):")
        for a in links[:_MAX_SUMMARY_ITEMS]:
            lines.append(f"  [{a.get_text(' ', strip=True)}]({a.get('href', '')})")

    buttons = soup.find_all("button") + soup.find_all("input", attrs={"type": ["submit", "button"]})
    if buttons:
        lines.append("")
        lines.append(f"Buttons ({len(buttons)}):")
        for b in buttons[:_MAX_SUMMARY_ITEMS]:
            label = b.get_text(" ", strip=True) or b.get("value") or b.get("aria-label") or ""
            lines.append(f"  {label} {opening_tag(b)}")

    fields = [
        f for f in soup.find_all(["input", "select", "textarea"])
        if f.get("type") not in ("submit", "button", "hidden")
    ]
    if fields:
        lines.append("")
        lines.append(f"Form fields ({len(fields)}):")
        for f in fields[:_MAX_SUMMARY_ITEMS]:
            lines.append(f"  {opening_tag(f)}")

    forms = soup.find_all("form")
    if forms:
        lines.append("")
        lines.append(f"Forms ({len(forms)}):")
        for form in forms[:_MAX_SUMMARY_ITEMS]:
            lines.append(f"  {opening_tag(form)}")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Element search and formatting
# ---------------------------------------------------------------------------

def get_parent_context(element: Tag, context_size: int) -> str:
    """List up to ``context_size`` ancestors, outermost first, indented."""
    parents = []
    parent = element.parent
    while parent is not None and parent.name != "[document]" and len(parents) < context_size:
        parents.append(parent)
        parent = parent.parent
    if not parents:
        return ""
    lines = ["Context:"]
    for depth, p in enumerate(reversed(parents)):
        lines.append("  " * (depth + 1) + opening_tag(p))
    return "\n".join(lines) + "\n"


def format_elements(elements: list[Tag], header: str, context_size: int) -> str:
    result = f"{header}\n\n"
    for index, element in enumerate(elements, 1):
        result += f"--- Element {index} ---\n"
        if context_size > 0:
            result += get_parent_context(element, context_size)
        result += f"Element: {_truncate(str(element))}\n\n"
    return result


def _unique(elements: list[Tag]) -> list[Tag]:
    seen: set[int] = set()
    unique = []
    for el in elements:
        if id(el) not in seen:
            seen.add(id(el))
            unique.append(el)
    return unique


def find_elements_with_matching_text(soup: BeautifulSoup, text: str) -> list[Tag]:
    """Elements whose own text or descriptive attributes contain ``text``."""
    needle = text.lower()
    matches = []
    for string in soup.find_all(string=True):
        if needle in string.lower():
            parent = string.parent
            if parent is not None and parent.name not in ("[document]", "html", "body", "title", "head"):
                matches.append(parent)
    for tag in soup.find_all(True):
        if any(needle in str(tag.get(attr, "")).lower() for attr in _TEXT_ATTRS):
            matches.append(tag)
    return _unique(matches)


def add_elements_from_matching_labels(soup: BeautifulSoup, elements: list[Tag]) -> list[Tag]:
    """For matched <label> elements, add the form control they describe."""
    result = list(elements)
    for el in elements:
        if el.name != "label":
            continue
        control = None
        if el.get("for"):
            control = soup.find(id=el["for"])
        if control is None:
            control = el.find(["input", "select", "textarea"])
        if control is not None:
            result.append(control)
    return _unique(result)


def add_nearby_interactive_elements(elements: list[Tag], limit: int = 5) -> list[Tag]:
    """For non-interactive matches, add interactive elements sharing their parent."""
    result = list(elements)
    for el in elements:
        if el.name in INTERACTIVE_TAGS or el.parent is None:
            continue
        result.extend(el.parent.find_all(INTERACTIVE_TAGS, limit=limit))
    return _unique(result)
