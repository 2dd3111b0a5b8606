# src/ktop/reporters/table_renderer.py
"""
A reporter that draws a TableModel as a bordered, fixed-width text table.

Column widths are measured over the header and every row before anything is
printed; they never change afterwards.
"""

import logging
import threading
from typing import List, Optional, Sequence

from rich.console import Console
from rich.text import Text

from ..models.table import TableModel

logger = logging.getLogger(__name__)

# xterm colour 238
STRIPE_STYLE = "on grey27"

_TOP = ("┌", "┬", "┐")
_MID = ("├", "┼", "┤")
_BOTTOM = ("└", "┴", "┘")
_HLINE = "─"
_VLINE = "│"


class RowStriper:
    """
    Alternating background state of one render call.

    The first data row is striped, the second plain, and so on. The header
    never goes through the striper.
    """

    def __init__(self, style: str = STRIPE_STYLE, enabled: bool = True):
        self.style = style if enabled else ""
        self._striped = True

    def next_style(self) -> str:
        style = self.style if self._striped else ""
        self._striped = not self._striped
        return style


def column_widths(model: TableModel) -> List[int]:
    """Width of each column: the longest cell in it, header included."""
    widths = [0] * model.column_count
    for row in [model.header, *model.rows]:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    return widths


def _rule(widths: Sequence[int], glyphs) -> Text:
    left, junction, right = glyphs
    return Text(left + junction.join(_HLINE * (w + 2) for w in widths) + right)


def _row(cells: Sequence[str], widths: Sequence[int], style: str = "") -> Text:
    line = Text(_VLINE)
    for cell, width in zip(cells, widths):
        line.append(f" {cell.ljust(width)} ", style=style or None)
        line.append(_VLINE)
    return line


class TableRenderer:
    """
    Renders TableModels onto a rich Console.

    ``lock`` serializes whole tables on the output; pass the same lock to
    anything else writing to the terminal.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        colorize: bool = True,
        lock: Optional[threading.Lock] = None,
    ):
        self.console = console or Console(highlight=False)
        self.colorize = colorize
        self.lock = lock or threading.Lock()

    def render(self, model: TableModel) -> List[Text]:
        """Returns the lines of the table. Does not modify the model."""
        widths = column_widths(model)
        striper = RowStriper(enabled=self.colorize)

        lines = [_rule(widths, _TOP), _row(model.header, widths), _rule(widths, _MID)]
        for row in model.rows:
            lines.append(_row(row, widths, striper.next_style()))
        lines.append(_rule(widths, _BOTTOM))
        return lines

    def print(self, model: TableModel) -> None:
        """Renders the table and writes it in one piece."""
        lines = self.render(model)
        with self.lock:
            for line in lines:
                self.console.print(line, soft_wrap=True)
        logger.debug("Rendered table '%s' with %d rows.", model.header[0], len(model.rows))

    def print_lines(self, lines: Sequence[str]) -> None:
        """Writes plain text lines under the same lock as the tables."""
        with self.lock:
            for line in lines:
                self.console.print(line, markup=False, highlight=False, soft_wrap=True)
