import os
import re
import json
import time
import logging
from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from styleprint.models import DesignSystem, RawExtraction
from styleprint.services.extractor import extract_raw

logger = logging.getLogger(__name__)

# OpenRouter pricing per million tokens for each model
# Update these if switching models or if pricing changes
MODEL_PRICING = {
    "google/gemini-2.5-flash": {"input": 0.30, "output": 2.50},
    "anthropic/claude-sonnet-4.5": {"input": 3.00, "output": 15.00},
}
DEFAULT_PRICING = {"input": 3.00, "output": 15.00}
DEFAULT_MODEL = "google/gemini-2.5-flash"

# How much of each token family goes into the prompt
MAX_PROMPT_COLORS = 50
MAX_PROMPT_SPACINGS = 20
MAX_PROMPT_COMPONENT_TAGS = 5


class DesignSystemGenerationError(RuntimeError):
    """The AI step could not produce a usable design system."""


class MissingAPIKeyError(DesignSystemGenerationError):
    pass


def _extract_usage(response) -> dict:
    """Extract token usage from an API response."""
    usage = getattr(response, "usage", None)
    tokens_in = getattr(usage, "prompt_tokens", 0) if usage else 0
    tokens_out = getattr(usage, "completion_tokens", 0) if usage else 0
    return {"tokens_in": tokens_in or 0, "tokens_out": tokens_out or 0}


def _calc_cost(tokens_in: int, tokens_out: int, model: str) -> float:
    """Calculate USD cost from token counts and model name."""
    pricing = MODEL_PRICING.get(model, DEFAULT_PRICING)
    cost = (tokens_in * pricing["input"] + tokens_out * pricing["output"]) / 1_000_000
    return round(cost, 6)


_client: AsyncOpenAI | None = None


def get_openrouter_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        _client = AsyncOpenAI(
            base_url="https://openrouter.ai/api/v1",
            api_key=os.getenv("OPENROUTER_API_KEY", ""),
            timeout=300.0,
        )
    return _client


# ─── Prompt building ───────────────────────────────────────────────────────

# Compact description of the target structure. Sent as text instead of a
# response schema; deep schemas get rejected by some providers.
DESIGN_SYSTEM_INTERFACE = """
export interface ColorToken { name: string; value: string; description?: string; }
export interface GradientToken { name: string; value: string; }
export interface TypographyScale { name: string; fontSize: string; lineHeight: string; fontWeight: string; fontFamily: string; letterSpacing?: string; sampleText?: string; }
export interface FontFamily { name: string; family: string; }
export interface SpacingScale { name: string; value: string; pixels?: number; }
export interface Breakpoint { name: string; value: string; description?: string; }
export interface BorderRadius { name: string; value: string; }
export interface ShadowToken { name: string; value: string; }
export interface OpacityToken { name: string; value: string; }
export interface ZIndexToken { name: string; value: number; }
export interface AnimationToken {
  transitions?: Array<{ name: string; property: string; duration: string; timing: string; }>;
  keyframes?: Array<{ name: string; definition: string; }>;
}
export interface IconToken { name: string; svg?: string; }
export interface ImageAsset { variant?: string; url: string; }
export interface ComponentVariant {
  name: string;
  description?: string;
  state?: string;
  htmlSnippet: string; // Self-contained HTML with Tailwind
  properties?: string[];
  accessibility?: { role?: string; ariaLabel?: string; keyboardSupport?: string; };
  interactivity?: { hoverStyle?: string; focusStyle?: string; activeStyle?: string; transition?: string; };
}
export interface ComponentCategory { category: string; name: string; occurrences?: number; variants: ComponentVariant[]; }
export interface DesignSystem {
  metadata: { projectName: string; version?: string; sourceUrl: string; technologiesDetected?: string[]; };
  colors: { primary?: ColorToken[]; secondary?: ColorToken[]; neutral?: ColorToken[]; semantic?: ColorToken[]; gradients?: GradientToken[]; };
  typography: { fontFamilies?: FontFamily[]; scales?: TypographyScale[]; };
  spacing: { scale?: SpacingScale[]; grid?: { columns?: number; gutterWidth?: string; maxWidth?: string; }; };
  breakpoints?: Breakpoint[];
  borderRadius?: BorderRadius[];
  shadows?: ShadowToken[];
  opacity?: OpacityToken[];
  zIndex?: ZIndexToken[];
  animations?: AnimationToken;
  icons?: { icons: IconToken[]; };
  images?: { logos?: ImageAsset[]; };
  components?: ComponentCategory[];
}
"""


def summarize_raw_extraction(raw: RawExtraction) -> str:
    """Render the raw extraction as the bounded listing the model sees."""
    # Sets are sorted so the same input always yields the same prompt
    sample_tags = ", ".join(c.tag for c in raw.components[:MAX_PROMPT_COMPONENT_TAGS])
    lines = [
        f"COLORS: {', '.join(sorted(raw.colors)[:MAX_PROMPT_COLORS])}",
        f"FONTS: {', '.join(sorted(raw.font_families))}",
        f"SPACINGS: {', '.join(sorted(raw.spacings)[:MAX_PROMPT_SPACINGS])}",
        f"RADIUS: {', '.join(sorted(raw.border_radius))}",
        f"SHADOWS: {', '.join(sorted(raw.shadows))}",
        f"COMPONENTS DETECTED: {len(raw.components)} (Sample: {sample_tags})",
    ]
    return "\n".join(lines)


def build_prompt(raw: RawExtraction) -> str:
    return (
        "You are a world-class Design Systems Architect.\n"
        "I have extracted raw data (CSS/HTML) from a website.\n"
        "Reverse engineer this into a structured Design System JSON.\n\n"
        "Target Structure: JSON matching the TypeScript interface below.\n"
        f"{DESIGN_SYSTEM_INTERFACE}\n"
        "=== RAW DATA EXTRACTED ===\n"
        f"{summarize_raw_extraction(raw)}\n\n"
        "=== INSTRUCTIONS ===\n"
        "1. Analyze the raw data and infer semantically meaningful tokens.\n"
        "2. For Components:\n"
        "   - Create CLEAN, self-contained HTML snippets using TAILWIND CSS classes.\n"
        "   - Deeply analyze 'accessibility' (ARIA roles) and 'interactivity' (hover/focus effects) "
        "and populate the nested objects.\n"
        "   - Do NOT just copy the input HTML. Refactor it into a reusable component structure.\n"
        "3. Be robust. If data is missing, make reasonable professional design assumptions.\n"
        "4. Output ONLY the JSON object. No markdown code fences.\n"
    )


# ─── Response parsing ──────────────────────────────────────────────────────

def _clean_json(content: str) -> str:
    """Strip markdown fences and any chatter around the JSON object."""
    content = content.strip()
    content = re.sub(r'^```(?:json)?\s*\n?', '', content, flags=re.MULTILINE)
    content = re.sub(r'\n?```\s*$', '', content, flags=re.MULTILINE)

    for ch in ["\u200b", "\u200c", "\u200d", "\ufeff"]:
        content = content.replace(ch, "")
    content = content.strip()

    # Strip preamble/trailer text outside the outermost object
    start = content.find("{")
    end = content.rfind("}")
    if start != -1 and end > start:
        content = content[start:end + 1]
    return content


def parse_design_system(raw_output: str) -> DesignSystem:
    if not raw_output or not raw_output.strip():
        raise DesignSystemGenerationError("No response from AI")

    try:
        data = json.loads(_clean_json(raw_output))
        return DesignSystem.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"[ai] Failed to parse design system JSON: {e} | head={raw_output[:300]!r}")
        raise DesignSystemGenerationError("Failed to parse AI response.") from e


# ─── Main generation entry point ───────────────────────────────────────────

async def generate_design_system(document: str) -> dict:
    """Extract raw tokens from `document` and have the AI structure them.

    Returns {"design_system": DesignSystem, "raw": RawExtraction, "usage": {...}}.
    """
    if not os.getenv("OPENROUTER_API_KEY"):
        raise MissingAPIKeyError("API key is missing")

    raw = extract_raw(document)
    prompt = build_prompt(raw)

    client = get_openrouter_client()
    model = os.getenv("DESIGN_SYSTEM_MODEL", DEFAULT_MODEL)
    logger.info(f"[ai] Generating design system: {len(prompt)} prompt chars, model={model}")

    t0 = time.time()
    try:
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            response_format={"type": "json_object"},
            temperature=0.2,
        )
    except OpenAIError as e:
        logger.error(f"[ai] Request failed: {e}")
        raise DesignSystemGenerationError(f"AI request failed: {e}") from e

    raw_output = response.choices[0].message.content or ""
    t_elapsed = time.time() - t0
    u = _extract_usage(response)
    total_cost = _calc_cost(u["tokens_in"], u["tokens_out"], model)
    logger.info(
        f"[ai] Response: {len(raw_output)} chars in {t_elapsed:.1f}s | model={model} "
        f"tokens_in={u['tokens_in']} tokens_out={u['tokens_out']} cost=${total_cost:.4f}"
    )

    design_system = parse_design_system(raw_output)

    return {
        "design_system": design_system,
        "raw": raw,
        "usage": {
            "tokens_in": u["tokens_in"],
            "tokens_out": u["tokens_out"],
            "total_cost": total_cost,
            "model": model,
            "duration_s": round(t_elapsed, 1),
        },
    }
