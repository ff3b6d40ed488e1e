# Area: Agent Tests
# PRD: docs/prd-engine.md
"""Tests for card_czar._agent.codec — prompts and reply parsing."""

from card_czar._agent.codec import (
    build_judging_prompt,
    build_selection_prompt,
    parse_index,
)
from card_czar._cards.cards import AnswerCard, PromptCard


def make_hand(n):
    return [AnswerCard(id=f"a{i}", text=f"Answer {i}") for i in range(n)]


class TestParseIndex:
    """Tests for parse_index."""

    def test_plain_integer(self):
        result = parse_index("3", 10)
        assert result.index == 3
        assert result.is_fallback is False

    def test_first_integer_token_wins(self):
        result = parse_index("I pick 2, maybe 5", 10)
        assert result.index == 2
        assert result.is_fallback is False

    def test_out_of_range_falls_back_to_zero(self):
        """Reply "7" with 5 submissions resolves to index 0."""
        result = parse_index("7", 5)
        assert result.index == 0
        assert result.is_fallback is True
        assert result.raw_text == "7"

    def test_negative_falls_back(self):
        result = parse_index("-1", 5)
        assert result.index == 0
        assert result.is_fallback is True

    def test_non_numeric_falls_back(self):
        result = parse_index("the banana one", 5)
        assert result.index == 0
        assert result.is_fallback is True
        assert result.raw_text == "the banana one"

    def test_empty_and_none_fall_back(self):
        assert parse_index("", 3).is_fallback is True
        assert parse_index(None, 3).is_fallback is True

    def test_last_valid_index(self):
        result = parse_index("9", 10)
        assert result.index == 9
        assert result.is_fallback is False


class TestSelectionPrompt:
    """Tests for build_selection_prompt."""

    def test_enumerates_hand_zero_based(self):
        prompt = build_selection_prompt(make_hand(3), PromptCard(id="p", text="Why ___?"))
        assert '0: "Answer 0"' in prompt
        assert '2: "Answer 2"' in prompt
        assert "from 0 to 2" in prompt
        assert "Why ___?" in prompt

    def test_mentions_required_count(self):
        single = build_selection_prompt(make_hand(2), PromptCard(id="p", text="x"))
        double = build_selection_prompt(make_hand(2), PromptCard(id="p", text="x", pick=2))
        assert "requires 1 answer card " in single
        assert "requires 2 answer cards" in double


class TestJudgingPrompt:
    """Tests for build_judging_prompt."""

    def test_joins_multi_card_submissions(self):
        hand = make_hand(4)
        prompt = build_judging_prompt(
            PromptCard(id="p", text="___ and ___", pick=2),
            [(hand[0], hand[1]), (hand[2], hand[3])],
        )
        assert "0: Answer 0 + Answer 1" in prompt
        assert "1: Answer 2 + Answer 3" in prompt
        assert "from 0 to 1" in prompt
