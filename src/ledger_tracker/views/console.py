from typing import List, Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table
from rich.text import Text

from ledger_tracker.services.models import Summary
from ledger_tracker.views.base import LedgerView
from ledger_tracker.views.chart import DoughnutChart
from ledger_tracker.views.formatting import CurrencyFormatter
from ledger_tracker.views.presenter import TransactionRow

THEMES = {
    False: {"border": "cyan", "title": "white", "dim": "dim"},
    True: {"border": "bright_black", "title": "bright_white", "dim": "grey50"},
}

CHART_WIDTH = 40

class RichConsoleView(LedgerView):
    """
    Terminal dashboard built with rich.

    Render calls update the view state; refresh() prints the
    summary panel, chart and list in one go.
    """

    def __init__(
        self,
        formatter: CurrencyFormatter,
        console: Optional[Console] = None,
        assume_yes: bool = False,
    ):
        self.formatter = formatter
        self.console = console or Console()
        self.assume_yes = assume_yes
        self.rows: List[TransactionRow] = []
        self.summary: Optional[Summary] = None
        self.chart: Optional[DoughnutChart] = None
        self.dark = False

    def render_list(self, rows: List[TransactionRow]) -> None:
        self.rows = list(rows)

    def prepend_row(self, row: TransactionRow) -> None:
        self.rows.insert(0, row)

    def render_summary(self, summary: Summary) -> None:
        self.summary = summary

    def render_chart(self, chart: DoughnutChart) -> None:
        self.chart = chart

    def set_row_visible(self, row_id: int, visible: bool) -> None:
        for row in self.rows:
            if row.id == row_id:
                row.visible = visible

    def confirm(self, message: str) -> bool:
        if self.assume_yes:
            return True
        return Confirm.ask(message, console=self.console, default=False)

    def apply_theme(self, dark: bool) -> None:
        self.dark = dark

    @property
    def visible_rows(self) -> List[TransactionRow]:
        return [row for row in self.rows if row.visible]

    def refresh(self) -> None:
        """Print the dashboard"""
        theme = THEMES[self.dark]

        if self.summary is not None:
            self.console.print(self._summary_panel(theme))

        if self.chart is not None:
            self.console.print(self._chart_panel(theme))

        self.console.print(self._transactions_table(theme))

    def _summary_panel(self, theme) -> Panel:
        summary = self.summary
        balance_color = "green" if summary.balance >= 0 else "red"
        text = (
            f"[bold {balance_color}]Balance:[/bold {balance_color}]  "
            f"{self.formatter.format(summary.balance)}\n"
            f"[green]💰 Income:[/green]  {self.formatter.format(summary.income)}\n"
            f"[red]💸 Expense:[/red] {self.formatter.format(summary.expense)}"
        )
        return Panel(
            text,
            title=f"[bold {theme['title']}]Summary[/bold {theme['title']}]",
            border_style=theme["border"],
            padding=(1, 2),
        )

    def _chart_panel(self, theme) -> Panel:
        lines = []
        for (label, color, value), share in zip(self.chart.slices(), self.chart.shares()):
            filled = round(share * CHART_WIDTH)
            line = Text(f"{label:<9}")
            line.append("█" * filled, style=color)
            line.append("░" * (CHART_WIDTH - filled), style=theme["dim"])
            line.append(f" {self.formatter.format(value)} ({share:.0%})")
            lines.append(line)
        return Panel(Group(*lines), title="Income vs Expenses", border_style=theme["border"])

    def _transactions_table(self, theme) -> Table:
        table = Table(title="Transactions", border_style=theme["border"], padding=(0, 1))
        table.add_column("", width=2)
        table.add_column("ID", justify="right", style=theme["dim"])
        table.add_column("Title", style=theme["title"], max_width=40)
        table.add_column("Details", style=theme["dim"])
        table.add_column("Amount", justify="right")

        visible = self.visible_rows
        if not visible:
            table.add_row("", "", "[yellow]No transactions[/yellow]", "", "")

        for row in visible:
            color = "green" if row.type == "income" else "red"
            table.add_row(
                row.glyph,
                str(row.id),
                Text(row.title),
                Text(row.caption),
                Text(row.amount_text, style=color),
            )

        return table
