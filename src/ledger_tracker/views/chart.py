from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence, Tuple

@dataclass
class DoughnutChart:
    """
    Two-slice income/expense chart.

    Labels and colors are fixed at construction; only the data
    changes afterwards.
    """
    labels: Tuple[str, str] = ("Income", "Expenses")
    colors: Tuple[str, str] = ("#2ecc71", "#e74c3c")
    data: Tuple[Decimal, Decimal] = field(default=(Decimal("0"), Decimal("0")))
    revision: int = 0

    def update(self, data: Sequence[Decimal]) -> None:
        """Replace the data series and mark the chart for redraw"""
        if len(data) != 2:
            raise ValueError(f"Chart takes exactly two values, got {len(data)}")
        self.data = (Decimal(data[0]), Decimal(data[1]))
        self.revision += 1

    @property
    def total(self) -> Decimal:
        return self.data[0] + self.data[1]

    def shares(self) -> Tuple[float, float]:
        """Fraction of the doughnut taken by each slice (0, 0 when empty)"""
        if self.total == 0:
            return (0.0, 0.0)
        return (float(self.data[0] / self.total), float(self.data[1] / self.total))

    def slices(self):
        return list(zip(self.labels, self.colors, self.data))
