"""Terminal display of odds results."""

from typing import Iterable, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pokerodds.game.cards import Card
from pokerodds.simulation.odds import OddsResult

BAR_WIDTH = 30

OUTCOME_STYLES = {
    "Win": "green",
    "Tie": "yellow",
    "Lose": "red",
}


def _bar(rate: float, color: str) -> Text:
    filled = round(rate / 100 * BAR_WIDTH)
    bar = Text("█" * filled, style=color)
    bar.append("░" * (BAR_WIDTH - filled), style="grey30")
    return bar


def result_table(result: OddsResult) -> Table:
    """Build a table with one row per outcome."""
    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Outcome", style="bold", width=8)
    table.add_column("Probability", justify="right")
    table.add_column("")

    rates = {
        "Win": result.win_rate,
        "Tie": result.tie_rate,
        "Lose": result.lose_rate,
    }
    for outcome, rate in rates.items():
        color = OUTCOME_STYLES[outcome]
        table.add_row(
            Text(outcome, style=color),
            f"{rate:.1f}%",
            _bar(rate, color),
        )

    return table


def result_panel(
    result: OddsResult,
    hole_cards: Iterable[Card] = (),
    community_cards: Iterable[Card] = (),
    num_opponents: Optional[int] = None,
) -> Panel:
    """Wrap the outcome table with the spot description and footer."""
    lines = []
    hole = " ".join(str(c) for c in hole_cards)
    board = " ".join(str(c) for c in community_cards)
    if hole:
        lines.append(f"[bold]Hand:[/] {hole}")
    lines.append(f"[bold]Board:[/] {board or '-'}")
    if num_opponents is not None:
        lines.append(f"[bold]Opponents:[/] {num_opponents}")

    footer = f"[dim]{result.simulations:,} simulations[/]"
    if result.best_hand is not None:
        footer = f"[bold]Best hand seen:[/] {result.best_hand.label}    " + footer

    return Panel(
        Group(
            Text.from_markup("\n".join(lines)),
            Text(),
            result_table(result),
            Text(),
            Text.from_markup(footer),
        ),
        title="[bold]Odds[/]",
        border_style="cyan",
    )


def display_result(
    result: OddsResult,
    hole_cards: Iterable[Card] = (),
    community_cards: Iterable[Card] = (),
    num_opponents: Optional[int] = None,
    console: Optional[Console] = None,
) -> None:
    """Print a result panel to the terminal."""
    console = console or Console()
    console.print(result_panel(result, hole_cards, community_cards, num_opponents))
