import re
import logging
from bs4 import BeautifulSoup

from styleprint.models import RawExtraction
from styleprint.services.sampler import sample_components

logger = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"#(?:[0-9A-Fa-f]{3}){1,2}\b")
RGB_COLOR_RE = re.compile(r"rgba?\([^)]+\)")
HSL_COLOR_RE = re.compile(r"hsla?\([^)]+\)")

STYLE_BLOCK_RE = re.compile(r"<style[^>]*>([\s\S]*?)</style>", re.IGNORECASE)

# Body stops at the first unmatched "}". One level of nesting is allowed so
# keyframe selectors (from{...} to{...}) stay inside; anything deeper is not
# bounded correctly.
KEYFRAMES_RE = re.compile(r"@keyframes\s+([^\s{]+)\s*\{((?:[^{}]|\{[^{}]*\})*)\}")

BREAKPOINT_RE = re.compile(r"@media[^{]*\((?:min|max)-width:\s*([^)]+)\)")

# A "<" inside a CSS comment is not markup
CSS_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")

SPACING_PROPERTIES = ("margin", "padding", "gap")


def extract_colors(css: str) -> set[str]:
    """Collect hex, rgb(a) and hsl(a) literals from CSS text."""
    colors = set()
    for pattern in (HEX_COLOR_RE, RGB_COLOR_RE, HSL_COLOR_RE):
        colors.update(m.group(0) for m in pattern.finditer(css))
    return colors


def extract_css_property(css: str, property_name: str) -> set[str]:
    """Collect every declared value of `property_name`.

    The value runs up to the next ";" or "}" and is stripped. Shorthands are
    kept whole, e.g. "margin: 0 auto" yields "0 auto".
    """
    pattern = re.compile(re.escape(property_name) + r":\s*([^;}]+)")
    return {m.group(1).strip() for m in pattern.finditer(css)}


def extract_font_families(css: str) -> set[str]:
    return extract_css_property(css, "font-family")


def extract_spacings(css: str) -> set[str]:
    spacings = set()
    for prop in SPACING_PROPERTIES:
        spacings |= extract_css_property(css, prop)
    return spacings


def extract_keyframes(css: str) -> dict[str, str]:
    """Map keyframe name -> trimmed body. The first definition of a name wins."""
    keyframes: dict[str, str] = {}
    for m in KEYFRAMES_RE.finditer(css):
        keyframes.setdefault(m.group(1), m.group(2).strip())
    return keyframes


def extract_breakpoints(css: str) -> dict[str, str]:
    """Map width expression -> the "@media ...(min|max-width: X)" prefix.

    Only the first media query seen for a given width is kept.
    """
    breakpoints: dict[str, str] = {}
    for m in BREAKPOINT_RE.finditer(css):
        breakpoints.setdefault(m.group(1).strip(), m.group(0))
    return breakpoints


def split_style_blocks(document: str) -> str:
    """Concatenate the contents of every <style> block, newline after each."""
    return "".join(m.group(1) + "\n" for m in STYLE_BLOCK_RE.finditer(document))


def _looks_like_markup(text: str) -> bool:
    """True when the text holds at least one real element."""
    soup = BeautifulSoup(CSS_COMMENT_RE.sub("", text), "html.parser")
    return soup.find() is not None


def extract_raw(document: str) -> RawExtraction:
    """Run the full extraction pass over an HTML document (or bare CSS)."""
    css = split_style_blocks(document)
    if not css and not _looks_like_markup(document):
        # Pasted stylesheet, no HTML wrapper
        css = document

    raw = RawExtraction(
        colors=extract_colors(css),
        font_families=extract_font_families(css),
        font_sizes=extract_css_property(css, "font-size"),
        font_weights=extract_css_property(css, "font-weight"),
        line_heights=extract_css_property(css, "line-height"),
        spacings=extract_spacings(css),
        border_radius=extract_css_property(css, "border-radius"),
        shadows=extract_css_property(css, "box-shadow"),
        transitions=extract_css_property(css, "transition"),
        keyframes=extract_keyframes(css),
        breakpoints=extract_breakpoints(css),
        z_indexes=extract_css_property(css, "z-index"),
        opacity=extract_css_property(css, "opacity"),
        components=sample_components(document),
    )

    logger.info(
        f"[extract] {len(document)} chars input, {len(css)} chars CSS: "
        f"{len(raw.colors)} colors, {len(raw.font_families)} fonts, "
        f"{len(raw.spacings)} spacings, {len(raw.keyframes)} keyframes, "
        f"{len(raw.breakpoints)} breakpoints, {len(raw.components)} components"
    )
    return raw
