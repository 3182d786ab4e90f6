"""Typer CLI application."""
from __future__ import annotations

import logging
from typing import List, Optional

import typer

app = typer.Typer(
    name="rolenroll",
    help="Role&Roll dice pools: points, rerolls, plus and minus tokens",
    no_args_is_help=True,
)


@app.command()
def roll(
    tokens: Optional[List[str]] = typer.Argument(None, help="Pool, e.g. 5 a2 n1 (default: 5 normal dice)"),
    confirm: Optional[bool] = typer.Option(None, "--confirm/--auto", help="Ask before each reroll round"),
    bonus_success: int = typer.Option(0, "--bonus-success", "-b", min=0, help="Bonus successes added to the total"),
    bonus_penalty: int = typer.Option(0, "--bonus-penalty", "-p", min=0, help="Penalties subtracted from the total"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed the dice for a reproducible roll"),
    html: bool = typer.Option(False, "--html", help="Also print the HTML chat card"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every die"),
) -> None:
    """Roll a Role&Roll dice pool."""
    from rolenroll.app import RollApp
    from rolenroll.cli.input_handler import InvalidPoolError
    from rolenroll.mechanics.pool import RerollPolicy

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    roll_app = RollApp(seed=seed)
    if seed is not None:
        roll_app.display.show_info(f"Seeded roll ({seed})")
    policy = roll_app.policy
    if confirm is not None:
        policy = RerollPolicy.CONFIRMED if confirm else RerollPolicy.AUTOMATIC

    try:
        outcome = roll_app.roll_command(
            " ".join(tokens or []),
            policy=policy,
            confirm=roll_app.prompt_reroll,
            bonus_success=bonus_success,
            bonus_penalty=bonus_penalty,
        )
    except InvalidPoolError as e:
        roll_app.display.show_warning(str(e))
        raise typer.Exit(code=1)

    roll_app.display.show_outcome(outcome)
    if html:
        roll_app.display.console.print(roll_app.chat_log[-1].content, markup=False, highlight=False, soft_wrap=True)


@app.command()
def faces(
    token: str = typer.Argument("d", help="Die to show: d, aN or nN"),
) -> None:
    """Show the six faces of a die."""
    from rolenroll.cli.display import PoolDisplay
    from rolenroll.cli.input_handler import InvalidPoolError, parse_die_token

    display = PoolDisplay()
    try:
        config = parse_die_token(token)
    except InvalidPoolError as e:
        display.show_error(str(e))
        raise typer.Exit(code=1)
    display.show_faces(config)


if __name__ == "__main__":
    app()
