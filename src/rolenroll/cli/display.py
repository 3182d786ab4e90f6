"""Rich terminal display for pool rolls."""
from __future__ import annotations

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from rolenroll.mechanics.faces import labels, layout
from rolenroll.models.dice import DieConfig, Face, PoolOutcome, RoundResult

console = Console()

FACE_SYMBOLS = {
    Face.POINT: "●",
    Face.REROLL: "Ⓡ",
    Face.PLUS: "+",
    Face.MINUS: "−",
    Face.BLANK: "□",
}

FACE_STYLES = {
    Face.POINT: "bold green",
    Face.REROLL: "bold yellow",
    Face.PLUS: "cyan",
    Face.MINUS: "red",
    Face.BLANK: "dim",
}


def plural_points(total: int) -> str:
    return f"{total} point{'' if total == 1 else 's'}"


class PoolDisplay:
    def __init__(self, width: int = 60, show_rounds: bool = True, output: Console | None = None) -> None:
        self.console = output or console
        self.width = width
        self.show_rounds = show_rounds

    def faces_text(self, results: list[RoundResult]) -> Text:
        text = Text()
        for i, r in enumerate(results):
            if i:
                text.append(" ")
            text.append(FACE_SYMBOLS[r.face], style=FACE_STYLES[r.face])
        return text

    def show_round(self, index: int, results: list[RoundResult]) -> None:
        """Print a single round as it lands (used by the confirm prompt)."""
        label = "Roll" if index == 0 else f"Reroll {index}"
        line = Text(f"  {label}: ", style="dim")
        line.append_text(self.faces_text(results) if results else Text("no dice", style="dim"))
        self.console.print(line)

    def show_outcome(self, outcome: PoolOutcome, title: str = "Role&Roll Dice Pool") -> None:
        score = outcome.score
        content = Text()

        if self.show_rounds:
            for i, rnd in enumerate(outcome.rounds):
                label = "Roll" if i == 0 else f"Reroll {i}"
                content.append(f"{label:<10}", style="dim")
                content.append_text(self.faces_text(rnd) if rnd else Text("no dice", style="dim"))
                content.append("\n")
        else:
            content.append_text(self.faces_text(outcome.results))
            content.append("\n")

        content.append(f"\nBase points: {score.base_points}\n")
        content.append(f"+ tokens: {score.plus_tokens}, - tokens: {score.minus_tokens}\n")
        content.append(f"R&R : {score.reroll_count}\n")
        if score.bonus_success or score.bonus_penalty:
            content.append(f"Bonus: +{score.bonus_success} / -{score.bonus_penalty}\n")
        if outcome.finished_early:
            content.append("Stopped with rerolls pending\n", style="yellow")
        content.append(f"Total: {plural_points(score.final_total)}", style="bold")

        self.console.print(Panel(
            content,
            title=f"[bold]{title}[/bold]",
            border_style="green" if score.final_total else "red",
            box=box.ROUNDED,
            width=self.width,
        ))

    def show_faces(self, config: DieConfig) -> None:
        table = Table(title=f"Die {config.token} ({config.kind.value})", box=box.SIMPLE_HEAVY)
        table.add_column("Side", justify="right")
        table.add_column("Face")
        table.add_column("Label", justify="center")
        for side, (face, label) in enumerate(zip(layout(config), labels(config)), start=1):
            table.add_row(
                str(side),
                Text(f"{FACE_SYMBOLS[face]} {face.value}", style=FACE_STYLES[face]),
                label or "-",
            )
        self.console.print(table)

    def confirm_reroll(self, pending: list[DieConfig]) -> bool:
        tokens = " ".join(c.token for c in pending)
        answer = self.console.input(
            f"[bold cyan]Reroll {len(pending)} dice ({tokens})? (y/n) > [/bold cyan]"
        ).strip().lower()
        return answer in ("y", "yes", "")

    def show_warning(self, message: str) -> None:
        self.console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")

    def show_error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def show_info(self, message: str) -> None:
        self.console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")
