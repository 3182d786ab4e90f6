"""Tests for src/rolenroll/chat/card.py."""
from __future__ import annotations

from rolenroll.chat.card import ChatMessage, build_message, render_chat_card
from rolenroll.mechanics.pool import resolve_pool
from rolenroll.models.dice import DieConfig, DieKind


class TestRenderChatCard:
    def test_header_and_totals(self, scripted):
        outcome = resolve_pool([DieConfig()] * 2, roller=scripted([1, 4]))
        html = render_chat_card(outcome)
        assert html.startswith('<div class="role-roll-chat">')
        assert "Role&amp;Roll Dice Pool" in html
        assert "Base points: 1" in html
        assert "R&amp;R : 0" in html
        assert "Total: 1 point</strong>" in html

    def test_face_classes(self, scripted):
        pool = [
            DieConfig(),
            DieConfig(kind=DieKind.ADVANTAGE, plus_count=1),
            DieConfig(kind=DieKind.NEGATIVE, minus_count=1),
            DieConfig(),
        ]
        html = render_chat_card(resolve_pool(pool, roller=scripted([1, 2, 2, 3])))
        for face in ("point", "plus", "minus", "blank"):
            assert f"role-roll-face-{face}" in html
        assert "Total: 1 point" in html

    def test_one_row_per_round(self, scripted):
        outcome = resolve_pool([DieConfig()], roller=scripted([6, 6, 2]))
        html = render_chat_card(outcome)
        assert html.count('class="role-roll-dice-row"') == 3
        assert "Reroll 2" in html
        assert "role-roll-face-reroll" in html
        assert "Total: 2 points" in html

    def test_single_round_has_no_labels(self, scripted):
        html = render_chat_card(resolve_pool([DieConfig()], roller=scripted([1])))
        assert "role-roll-round-label" not in html

    def test_bonus_line(self, scripted):
        outcome = resolve_pool([DieConfig()], roller=scripted([1]), bonus_success=2, bonus_penalty=1)
        html = render_chat_card(outcome)
        assert "Bonus: +2 / -1" in html
        assert "Total: 2 points" in html

    def test_custom_title_escaped(self, scripted):
        html = render_chat_card(resolve_pool([], roller=scripted([])), title="<b>Bold</b>")
        assert "&lt;b&gt;Bold&lt;/b&gt;" in html
        assert "Total: 0 points" in html


class TestBuildMessage:
    def test_wraps_card(self, scripted):
        outcome = resolve_pool([DieConfig()], roller=scripted([1]))
        message = build_message(outcome, speaker="Aria", flavor="Climb the wall")
        assert isinstance(message, ChatMessage)
        assert message.speaker == "Aria"
        assert message.flavor == "Climb the wall"
        assert message.content == render_chat_card(outcome)
