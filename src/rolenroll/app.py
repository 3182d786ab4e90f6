"""Application bootstrap — wires the pool resolver to its collaborators."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rolenroll.chat.card import ChatMessage, build_message
from rolenroll.cli.input_handler import DEFAULT_DICE, MAX_DICE, ParsedPool, parse_pool_command
from rolenroll.mechanics.dice import DieRoller, roll_d6, seeded_roller
from rolenroll.mechanics.pool import MAX_ROUNDS, ConfirmReroll, RerollPolicy, RollHook, resolve_pool
from rolenroll.models.dice import DieConfig, PoolOutcome, RoundResult
from rolenroll.utils import to_number

logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent.parent / "config.toml"


def _load_config(path: Path | None = None) -> dict[str, Any]:
    """Load config.toml from project root."""
    import tomllib

    config_path = path or CONFIG_PATH
    if config_path.exists():
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    return {}


class RollApp:
    """Rolls pools for a host: parses commands, rolls, and posts chat cards."""

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        seed: int | None = None,
        roller: DieRoller | None = None,
    ):
        self.config = config if config is not None else _load_config()
        if roller is not None:
            self.roller = roller
        elif seed is not None:
            self.roller = seeded_roller(seed)
        else:
            self.roller = roll_d6
        self.on_roll: RollHook | None = self._log_die
        self.chat_log: list[ChatMessage] = []

        self._display = None

    # -- Settings --

    @property
    def pool_config(self) -> dict[str, Any]:
        return self.config.get("pool", {})

    @property
    def default_dice(self) -> int:
        return max(0, to_number(self.pool_config.get("default_dice"), DEFAULT_DICE))

    @property
    def max_dice(self) -> int:
        return max(1, to_number(self.pool_config.get("max_dice"), MAX_DICE))

    @property
    def max_rounds(self) -> int:
        return max(1, to_number(self.pool_config.get("max_rounds"), MAX_ROUNDS))

    @property
    def policy(self) -> RerollPolicy:
        return RerollPolicy.parse(self.pool_config.get("reroll_policy", RerollPolicy.AUTOMATIC))

    @property
    def speaker(self) -> str:
        return self.config.get("chat", {}).get("speaker", "Role&Roll")

    @property
    def display(self):
        if self._display is None:
            from rolenroll.cli.display import PoolDisplay

            disp_cfg = self.config.get("display", {})
            self._display = PoolDisplay(
                width=disp_cfg.get("width", 60),
                show_rounds=disp_cfg.get("show_rounds", True),
            )
        return self._display

    # -- Public interface --

    def parse(self, command: str) -> ParsedPool:
        return parse_pool_command(command, max_dice=self.max_dice, default_dice=self.default_dice)

    def roll(
        self,
        dice: Sequence[DieConfig | Any] | None,
        *,
        policy: RerollPolicy | str | None = None,
        confirm: ConfirmReroll | None = None,
        bonus_success: Any = 0,
        bonus_penalty: Any = 0,
    ) -> PoolOutcome:
        """Roll a list of die configs and post the result to the chat log."""
        outcome = resolve_pool(
            list(dice or []),
            roller=self.roller,
            policy=policy if policy is not None else self.policy,
            confirm=confirm,
            bonus_success=bonus_success,
            bonus_penalty=bonus_penalty,
            on_roll=self.on_roll,
            max_rounds=self.max_rounds,
        )
        self.chat_log.append(build_message(outcome, speaker=self.speaker))
        return outcome

    def roll_command(
        self,
        command: str,
        *,
        policy: RerollPolicy | str | None = None,
        confirm: ConfirmReroll | None = None,
        bonus_success: Any = 0,
        bonus_penalty: Any = 0,
    ) -> PoolOutcome:
        """Parse a "/rr ..." command and roll it.

        Raises InvalidPoolError before anything is rolled when the command
        cannot be satisfied. Parser warnings go to the display.
        """
        parsed = self.parse(command)
        for warning in parsed.warnings:
            self.display.show_warning(warning)
        return self.roll(
            parsed.dice,
            policy=policy,
            confirm=confirm,
            bonus_success=parsed.bonus_success + max(0, to_number(bonus_success)),
            bonus_penalty=parsed.bonus_penalty + max(0, to_number(bonus_penalty)),
        )

    def prompt_reroll(self, pending: list[DieConfig], rounds: list[list[RoundResult]]) -> bool:
        """Confirm callback for the terminal: show the latest round, then ask."""
        self.display.show_round(len(rounds) - 1, rounds[-1])
        return self.display.confirm_reroll(pending)

    # -- Helpers --

    @staticmethod
    def _log_die(value: int, config: DieConfig) -> None:
        logger.debug(f"Rolled {value} on {config.token}")


def roll_pool(
    dice: Sequence[DieConfig | Any] | None = None,
    *,
    roller: DieRoller = roll_d6,
    policy: RerollPolicy | str = RerollPolicy.AUTOMATIC,
    confirm: ConfirmReroll | None = None,
    bonus_success: Any = 0,
    bonus_penalty: Any = 0,
) -> PoolOutcome:
    """Roll a pool with default settings. Entry point for host macros."""
    app = RollApp(config={}, roller=roller)
    return app.roll(
        dice,
        policy=policy,
        confirm=confirm,
        bonus_success=bonus_success,
        bonus_penalty=bonus_penalty,
    )
