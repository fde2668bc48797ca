"""Prompt construction for the AI insights request."""

from __future__ import annotations

from typing import Iterable, Literal

from pydantic import BaseModel, Field

from .models import LikedTitle

SYSTEM_PROMPT = (
    "You are CineSage, a movie and series recommendation expert. Analyze the "
    "user's preferences and provide personalized, spoiler-free recommendations "
    "formatted as markdown."
)

NOVELTY_MIXES: dict[str, tuple[int, int, int]] = {
    "balanced": (3, 1, 1),
    "safer": (4, 1, 0),
    "spicier": (2, 1, 2),
}

RECOMMENDATION_TEMPLATE = """
Analyze the user's taste from these liked titles (movies or series):

{title_list}

Task:
Recommend {count} items, a mix of movies and TV/streaming series, with **at least {series_minimum} being series**.
Use a novelty mix = {novelty}:
- {safe_bets} Safe Bets
- {deep_cuts} Deep Cut
- {curveballs} Curveball

{detail_hint}
Tie each pick to specific liked titles and shared elements.
Avoid spoilers. Be concrete, not generic. {availability}{exclusions}{constraints}

Output format (markdown list). For each item:

- **Movie Title (Year)** [Movie|Series] - *[Safe Bet|Deep Cut|Curveball]*
  - Why you'll like it: <1-2 sentence rationale referencing liked titles>
  - Similar elements: <comma-separated themes/tones/craft>
  - Content note: <optional>{region_line}

End with:
**If you want more like any single pick above, say "more like: <title>" and I'll expand.**
"""


class HardLimits(BaseModel):
    """Optional content limits forwarded to the model."""

    violence: Literal["low", "ok"] | None = None
    horror: Literal["none", "ok"] | None = None
    max_runtime_minutes: int | None = Field(default=None, ge=1)
    languages: list[str] = Field(default_factory=list)
    decades: list[int] = Field(default_factory=list)

    def render(self) -> list[str]:
        lines: list[str] = []
        if self.violence:
            lines.append(f"- Violence tolerance: {self.violence}")
        if self.horror:
            lines.append(f"- Horror tolerance: {self.horror}")
        if self.max_runtime_minutes:
            lines.append(f"- Max runtime: {self.max_runtime_minutes} minutes")
        if self.languages:
            lines.append(f"- Preferred languages: {', '.join(self.languages)}")
        if self.decades:
            decades = ", ".join(str(decade) for decade in self.decades)
            lines.append(f"- Preferred decades: {decades}")
        return lines


class PromptOptions(BaseModel):
    """Knobs controlling the shape of the recommendation prompt."""

    count: int = Field(default=5, ge=1, le=20)
    style: Literal["concise", "detailed"] = "concise"
    novelty: Literal["balanced", "safer", "spicier"] = "balanced"
    region: str | None = None
    exclude: list[str] = Field(default_factory=list)
    hard_limits: HardLimits | None = None


def format_title(title: LikedTitle) -> str:
    line = f"- {title.label()}"
    if title.genre:
        line += f" - {title.genre}"
    return line


def build_recommendation_prompt(
    titles: Iterable[LikedTitle],
    options: PromptOptions | None = None,
) -> str:
    """Render the user prompt asking for markdown recommendations."""

    opts = options or PromptOptions()
    title_list = "\n".join(format_title(title) for title in titles)

    safe_bets, deep_cuts, curveballs = NOVELTY_MIXES[opts.novelty]

    if opts.style == "detailed":
        detail_hint = (
            "Each explanation ~2 sentences, mentioning 1-2 craft specifics if relevant."
        )
    else:
        detail_hint = "Use a single crisp sentence per pick."

    if opts.region:
        availability = (
            f'If confidently known, add a short "Where to watch ({opts.region})" note.'
        )
        region_line = f"\n  - Where to watch ({opts.region}): <optional>"
    else:
        availability = "Skip availability unless you're certain."
        region_line = ""

    excluded = [entry.strip() for entry in opts.exclude if entry and entry.strip()]
    exclusions = f"\nDo NOT recommend: {', '.join(excluded)}." if excluded else ""

    constraint_lines = opts.hard_limits.render() if opts.hard_limits else []
    constraints = ""
    if constraint_lines:
        constraints = "\n\nConstraints:\n" + "\n".join(constraint_lines)

    return RECOMMENDATION_TEMPLATE.format(
        title_list=title_list,
        count=opts.count,
        series_minimum=min(2, opts.count),
        novelty=opts.novelty,
        safe_bets=safe_bets,
        deep_cuts=deep_cuts,
        curveballs=curveballs,
        detail_hint=detail_hint,
        availability=availability,
        exclusions=exclusions,
        constraints=constraints,
        region_line=region_line,
    ).strip()
