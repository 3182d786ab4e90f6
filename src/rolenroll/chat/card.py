"""Chat card rendering for resolved pools."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from rolenroll.models.dice import Face, PoolOutcome

TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_TITLE = "Role&Roll Dice Pool"

CHAT_SYMBOLS = {
    Face.POINT: "●",
    Face.REROLL: "Ⓡ",
    Face.PLUS: "+",
    Face.MINUS: "−",
    Face.BLANK: "\u00a0",
}

_jinja_env: Environment | None = None


def _get_jinja() -> Environment:
    global _jinja_env
    if _jinja_env is None:
        _jinja_env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            autoescape=select_autoescape(default=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )
    return _jinja_env


@dataclass
class ChatMessage:
    speaker: str
    content: str
    flavor: str = ""


def render_chat_card(outcome: PoolOutcome, title: str = DEFAULT_TITLE) -> str:
    """Render the rounds and score of a pool as an HTML chat card."""
    rounds = [
        [
            {
                "face": r.face.value,
                "symbol": CHAT_SYMBOLS[r.face],
                "token": r.config.token,
                "value": r.raw_value,
            }
            for r in rnd
        ]
        for rnd in outcome.rounds
    ]
    template = _get_jinja().get_template("pool_card.j2")
    return template.render(
        title=title,
        rounds=rounds,
        score=outcome.score,
        finished_early=outcome.finished_early,
    ).strip()


def build_message(outcome: PoolOutcome, speaker: str = "Role&Roll", flavor: str = "") -> ChatMessage:
    return ChatMessage(speaker=speaker, content=render_chat_card(outcome), flavor=flavor)
