from cinesage.models import LikedTitle
from cinesage.prompts import HardLimits, PromptOptions, build_recommendation_prompt

LIKED = [
    LikedTitle(id=278, title="The Shawshank Redemption", year=1994, genre="Drama"),
    LikedTitle(id=1396, title="Breaking Bad", year=2008, genre="Crime", kind="series"),
]


def test_default_prompt_lists_titles_and_mix():
    prompt = build_recommendation_prompt(LIKED)

    assert "- The Shawshank Redemption (1994) - Drama" in prompt
    assert "- Breaking Bad (2008) - Crime" in prompt
    assert "Recommend 5 items" in prompt
    assert "- 3 Safe Bets" in prompt
    assert "Use a single crisp sentence per pick." in prompt
    assert "Skip availability unless you're certain." in prompt
    assert "Do NOT recommend" not in prompt
    assert "Constraints:" not in prompt


def test_prompt_renders_exclusions_region_and_constraints():
    options = PromptOptions(
        count=3,
        style="detailed",
        novelty="spicier",
        region="UK",
        exclude=["Fight Club (1999)", "  "],
        hard_limits=HardLimits(horror="none", max_runtime_minutes=120, decades=[1990, 2000]),
    )

    prompt = build_recommendation_prompt(LIKED, options)

    assert "Recommend 3 items" in prompt
    assert "- 2 Curveball" in prompt
    assert "~2 sentences" in prompt
    assert 'Where to watch (UK)' in prompt
    assert "Do NOT recommend: Fight Club (1999)." in prompt
    assert "- Horror tolerance: none" in prompt
    assert "- Max runtime: 120 minutes" in prompt
    assert "- Preferred decades: 1990, 2000" in prompt
