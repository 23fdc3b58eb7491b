from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for everything that crosses the HTTP boundary.

    The UI and the AI both speak camelCase (fontFamilies, borderRadius, ...),
    so fields are aliased and accept either spelling on input.
    Numbers are accepted for string fields ("fontWeight": 700 -> "700").
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


# ─── Raw extraction ────────────────────────────────────────────────────────


class ComponentFragment(CamelModel):
    tag: str
    classes: list[str] = Field(default_factory=list)
    html: str = ""
    text: str = ""


class RawExtraction(CamelModel):
    colors: set[str] = Field(default_factory=set)
    font_families: set[str] = Field(default_factory=set)
    font_sizes: set[str] = Field(default_factory=set)
    font_weights: set[str] = Field(default_factory=set)
    line_heights: set[str] = Field(default_factory=set)
    spacings: set[str] = Field(default_factory=set)
    border_radius: set[str] = Field(default_factory=set)
    shadows: set[str] = Field(default_factory=set)
    transitions: set[str] = Field(default_factory=set)
    keyframes: dict[str, str] = Field(default_factory=dict)
    breakpoints: dict[str, str] = Field(default_factory=dict)
    z_indexes: set[str] = Field(default_factory=set)
    opacity: set[str] = Field(default_factory=set)
    components: list[ComponentFragment] = Field(default_factory=list)


# ─── Generated design system ───────────────────────────────────────────────


class ColorToken(CamelModel):
    name: str
    value: str
    description: Optional[str] = None


class GradientToken(CamelModel):
    name: str
    value: str


class TypographyScale(CamelModel):
    name: str
    font_size: str
    line_height: str
    font_weight: str
    font_family: str
    letter_spacing: Optional[str] = None
    sample_text: Optional[str] = None


class FontFamily(CamelModel):
    name: str
    family: str


class SpacingScale(CamelModel):
    name: str
    value: str
    pixels: Optional[float] = None


class Breakpoint(CamelModel):
    name: str
    value: str
    description: Optional[str] = None


class BorderRadius(CamelModel):
    name: str
    value: str


class BorderToken(CamelModel):
    name: str
    full_value: str


class ShadowToken(CamelModel):
    name: str
    value: str


class OpacityToken(CamelModel):
    name: str
    value: str


class ZIndexToken(CamelModel):
    name: str
    # Models occasionally answer "10" instead of 10
    value: Union[int, float, str]


class TransitionToken(CamelModel):
    name: str
    property: str
    duration: str
    timing: str


class KeyframeToken(CamelModel):
    name: str
    definition: str


class AnimationToken(CamelModel):
    transitions: list[TransitionToken] = Field(default_factory=list)
    keyframes: list[KeyframeToken] = Field(default_factory=list)


class IconToken(CamelModel):
    name: str
    svg: Optional[str] = None


class ImageAsset(CamelModel):
    url: str
    variant: Optional[str] = None


class Accessibility(CamelModel):
    role: Optional[str] = None
    aria_label: Optional[str] = None
    keyboard_support: Optional[str] = None


class Interactivity(CamelModel):
    hover_style: Optional[str] = None
    focus_style: Optional[str] = None
    active_style: Optional[str] = None
    transition: Optional[str] = None


class ComponentVariant(CamelModel):
    name: str
    html_snippet: str
    description: Optional[str] = None
    state: Optional[str] = None
    properties: list[str] = Field(default_factory=list)
    accessibility: Optional[Accessibility] = None
    interactivity: Optional[Interactivity] = None


class ComponentCategory(CamelModel):
    category: str
    name: str
    occurrences: Optional[int] = None
    variants: list[ComponentVariant] = Field(default_factory=list)


class Metadata(CamelModel):
    project_name: str = ""
    source_url: str = ""
    version: Optional[str] = None
    technologies_detected: list[str] = Field(default_factory=list)


class ColorPalette(CamelModel):
    primary: list[ColorToken] = Field(default_factory=list)
    secondary: list[ColorToken] = Field(default_factory=list)
    neutral: list[ColorToken] = Field(default_factory=list)
    semantic: list[ColorToken] = Field(default_factory=list)
    gradients: list[GradientToken] = Field(default_factory=list)


class Typography(CamelModel):
    font_families: list[FontFamily] = Field(default_factory=list)
    scales: list[TypographyScale] = Field(default_factory=list)


class GridSpec(CamelModel):
    columns: Optional[int] = None
    gutter_width: Optional[str] = None
    max_width: Optional[str] = None


class Spacing(CamelModel):
    scale: list[SpacingScale] = Field(default_factory=list)
    grid: Optional[GridSpec] = None


class Icons(CamelModel):
    icons: list[IconToken] = Field(default_factory=list)


class Images(CamelModel):
    logos: list[ImageAsset] = Field(default_factory=list)


class DesignSystem(CamelModel):
    metadata: Metadata = Field(default_factory=Metadata)
    colors: ColorPalette = Field(default_factory=ColorPalette)
    typography: Typography = Field(default_factory=Typography)
    spacing: Spacing = Field(default_factory=Spacing)
    breakpoints: list[Breakpoint] = Field(default_factory=list)
    border_radius: list[BorderRadius] = Field(default_factory=list)
    shadows: list[ShadowToken] = Field(default_factory=list)
    opacity: list[OpacityToken] = Field(default_factory=list)
    z_index: list[ZIndexToken] = Field(default_factory=list)
    animations: Optional[AnimationToken] = None
    icons: Optional[Icons] = None
    images: Optional[Images] = None
    components: list[ComponentCategory] = Field(default_factory=list)
