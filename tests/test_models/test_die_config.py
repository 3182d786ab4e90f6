"""Tests for src/rolenroll/models/dice.py."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from rolenroll.models.dice import DieConfig, DieKind, Face, PoolOutcome, PoolScore, RoundResult


class TestDieKind:
    @pytest.mark.parametrize("raw, expected", [
        ("normal", DieKind.NORMAL),
        ("advantage", DieKind.ADVANTAGE),
        ("adv", DieKind.ADVANTAGE),
        ("NEG", DieKind.NEGATIVE),
        ("negative", DieKind.NEGATIVE),
        ("", DieKind.NORMAL),
        (None, DieKind.NORMAL),
        ("blessed", DieKind.NORMAL),
        (DieKind.NEGATIVE, DieKind.NEGATIVE),
    ])
    def test_parse(self, raw, expected):
        assert DieKind.parse(raw) is expected


class TestDieConfig:
    def test_defaults(self):
        config = DieConfig()
        assert config.kind is DieKind.NORMAL
        assert config.plus_count == 1
        assert config.minus_count == 1

    @pytest.mark.parametrize("raw, expected", [
        (7, 4),
        (4, 4),
        (2, 2),
        (0, 1),
        (-5, 1),
        ("3", 3),
        ("many", 1),
        (None, 1),
        (2.9, 2),
    ])
    def test_plus_count_clamped(self, raw, expected):
        assert DieConfig(kind="advantage", plus_count=raw).plus_count == expected

    def test_minus_count_zero_clamps_to_one(self):
        assert DieConfig(kind="negative", minus_count=0).minus_count == 1

    def test_unknown_kind_becomes_normal(self):
        assert DieConfig(kind="explosive").kind is DieKind.NORMAL

    def test_frozen(self):
        config = DieConfig()
        with pytest.raises(ValidationError):
            config.plus_count = 3

    def test_hashable_and_equal_by_value(self):
        a = DieConfig(kind="adv", plus_count=2)
        b = DieConfig(kind=DieKind.ADVANTAGE, plus_count=2)
        assert a == b
        assert len({a, b}) == 1

    def test_copy_for_reroll(self):
        config = DieConfig(kind="neg", minus_count=3)
        copy = config.copy_for_reroll()
        assert copy == config
        assert copy is not config

    @pytest.mark.parametrize("config, token, marked", [
        (DieConfig(), "d", 0),
        (DieConfig(kind="adv", plus_count=3), "a3", 3),
        (DieConfig(kind="neg", minus_count=2), "n2", 2),
    ])
    def test_token_and_marked_faces(self, config, token, marked):
        assert config.token == token
        assert config.marked_faces == marked


class TestCoerce:
    def test_passthrough(self):
        config = DieConfig(kind="adv")
        assert DieConfig.coerce(config) is config

    def test_camel_case_mapping(self):
        config = DieConfig.coerce({"kind": "adv", "plusCount": 9})
        assert config.kind is DieKind.ADVANTAGE
        assert config.plus_count == 4

    def test_snake_case_mapping(self):
        config = DieConfig.coerce({"kind": "negative", "minus_count": 2})
        assert config.minus_count == 2

    def test_empty_mapping(self):
        assert DieConfig.coerce({}) == DieConfig()

    @pytest.mark.parametrize("value", [None, 3, "adv", ["adv", 2]])
    def test_non_mapping_is_normal_die(self, value):
        assert DieConfig.coerce(value) == DieConfig()


class TestFace:
    @pytest.mark.parametrize("face, label", [
        (Face.POINT, "1"),
        (Face.REROLL, "R"),
        (Face.PLUS, "+"),
        (Face.MINUS, "-"),
        (Face.BLANK, ""),
    ])
    def test_labels(self, face, label):
        assert face.label == label

    def test_scores_point(self):
        assert {f for f in Face if f.scores_point} == {Face.POINT, Face.REROLL}


class TestPoolOutcome:
    def test_empty(self):
        outcome = PoolOutcome()
        assert outcome.rounds == []
        assert outcome.score == PoolScore()
        assert outcome.faces == []
        assert outcome.dice_rolled == 0

    def test_flattens_in_roll_order(self):
        d = DieConfig()
        outcome = PoolOutcome(rounds=[
            [RoundResult(d, 6, Face.REROLL), RoundResult(d, 3, Face.BLANK)],
            [RoundResult(d, 1, Face.POINT)],
        ])
        assert outcome.faces == [Face.REROLL, Face.BLANK, Face.POINT]
        assert outcome.dice_rolled == 3
