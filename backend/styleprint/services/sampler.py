import logging

from bs4 import BeautifulSoup

from styleprint.models import ComponentFragment

logger = logging.getLogger(__name__)

# Order matters: fragments come out grouped by selector, in this order.
COMPONENT_SELECTORS = [
    # Landmarks
    "nav", "header", "footer", "aside",
    # Interactive
    "button", "a.btn", ".button",
    ".card", "article",
    "form", "input", "select", "textarea",
    # Common UI patterns
    ".modal", ".dropdown", ".tooltip",
    ".hero", ".banner", ".cta",
    ".accordion", ".tabs", ".carousel",
    ".navbar", ".sidebar", ".menu",
]

MAX_FRAGMENT_HTML = 1000
MAX_FRAGMENT_TEXT = 100


def _class_list(tag) -> list[str]:
    cls = tag.get("class", [])
    if isinstance(cls, list):
        cls = " ".join(cls)
    return [c for c in cls.split() if c]


def sample_components(html: str) -> list[ComponentFragment]:
    """Pick out elements that look like reusable UI components.

    Every selector is matched independently, so an element hit by two
    selectors (e.g. <article class="card">) shows up twice.
    """
    soup = BeautifulSoup(html, "html.parser")
    components: list[ComponentFragment] = []

    for selector in COMPONENT_SELECTORS:
        for el in soup.select(selector):
            components.append(ComponentFragment(
                tag=el.name,
                classes=_class_list(el),
                html=str(el)[:MAX_FRAGMENT_HTML],
                text=el.get_text().strip()[:MAX_FRAGMENT_TEXT],
            ))

    logger.debug(f"[extract] Sampled {len(components)} component fragments")
    return components
