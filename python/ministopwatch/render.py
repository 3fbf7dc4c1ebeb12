"""Tables built from a finished stopwatch.

Two views are produced: one row per checkpoint (step duration, elapsed time,
share of the total and optional memory columns) and one row per distinct
checkpoint name (count and average step). Each view is drawn either as a
fixed-width text table or as an HTML table.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Sequence

from markupsafe import escape

from ministopwatch.checkpoint import RESERVED_NAMES
from ministopwatch.errors import MemoryProfilingDisabledError, NotFinishedError
from ministopwatch.formatting import format_bytes, format_percent, format_time, truncate

if TYPE_CHECKING:
    from ministopwatch.base import BaseStopwatch

logger = logging.getLogger(__name__)

NOT_ENOUGH_POINTS = "N/A (< 2 points)"
MEMORY_DISABLED = "Disabled"


class OutputMode(enum.Enum):
    TERMINAL = "terminal"
    MARKUP = "markup"


@dataclass(frozen=True)
class CheckpointRow:
    name: str
    duration: float
    elapsed: float
    time_percent: float
    memory_diff: int | None = None
    memory_peak: int | None = None

    @property
    def has_memory(self) -> bool:
        return self.memory_diff is not None

    def headers(self) -> List[str]:
        headers = ["Name", "Duration", "Elapsed Time", "Time %"]
        if self.has_memory:
            headers += ["Memory Diff", "Memory Peak"]
        return headers

    def cells(self) -> List[str]:
        cells = [
            self.name,
            format_time(self.duration, in_milliseconds=True),
            format_time(self.elapsed, in_milliseconds=True),
            format_percent(self.time_percent),
        ]
        if self.has_memory:
            cells += [
                format_bytes(self.memory_diff, with_sign=True),
                format_bytes(self.memory_peak or 0),
            ]
        return cells


@dataclass(frozen=True)
class AverageRow:
    name: str
    count: int
    average_duration: float | None
    average_memory_diff: float | None = None
    memory_tracked: bool = False
    memory_disabled: bool = False

    def headers(self) -> List[str]:
        headers = ["Name", "Count", "Avg Duration"]
        if self.memory_tracked:
            headers.append("Avg Memory Diff")
        return headers

    def cells(self) -> List[str]:
        cells = [
            self.name,
            str(self.count),
            (
                format_time(self.average_duration, in_milliseconds=True)
                if self.average_duration is not None
                else NOT_ENOUGH_POINTS
            ),
        ]
        if self.memory_tracked:
            if self.memory_disabled:
                cells.append(MEMORY_DISABLED)
            elif self.average_memory_diff is None:
                cells.append(NOT_ENOUGH_POINTS)
            else:
                cells.append(format_bytes(int(round(self.average_memory_diff)), with_sign=True))
        return cells


class StopwatchRenderer:
    """Formats the checkpoints of a finished stopwatch."""

    TABLE_CLASS = "stopwatch-table"
    AVERAGE_TABLE_CLASS = "stopwatch-average-table"
    HEADER_CLASS = "stopwatch-header"
    AVERAGE_HEADER_CLASS = "stopwatch-average-header"
    ROW_CLASS = "stopwatch-row"
    CELL_CLASS = "stopwatch-cell"
    NAME_CELL_CLASS = "stopwatch-name-cell"
    DATA_CELL_CLASS = "stopwatch-data-cell"
    START_ROW_CLASS = "stopwatch-start"
    END_ROW_CLASS = "stopwatch-end"
    AVERAGE_TITLE_CLASS = "stopwatch-average-title"

    def __init__(
        self, stopwatch: BaseStopwatch, min_col_width: int = 10, max_col_width: int = 40
    ) -> None:
        self._stopwatch = stopwatch
        self.min_col_width = min_col_width
        self.max_col_width = max_col_width

    def _require_finished(self) -> None:
        if self._stopwatch.is_running():
            raise NotFinishedError()

    # ------------------------------------------------------------------ #
    # row data
    # ------------------------------------------------------------------ #

    def get_formatted_data(self) -> List[CheckpointRow]:
        self._require_finished()
        checkpoints = self._stopwatch.get_checkpoints()
        if not checkpoints:
            return []

        total_time = self._stopwatch.get_time() or 0.0
        has_memory = checkpoints[0].memory is not None
        origin = checkpoints[0].time

        rows: List[CheckpointRow] = []
        for index, cp in enumerate(checkpoints):
            duration = 0.0
            percent = 0.0
            memory_diff = 0
            if index > 0:
                previous = checkpoints[index - 1]
                duration = cp.time - previous.time
                if total_time > 0:
                    percent = duration / total_time * 100
                if has_memory:
                    memory_diff = (cp.memory or 0) - (previous.memory or 0)
            rows.append(
                CheckpointRow(
                    name=cp.name,
                    duration=duration,
                    elapsed=cp.time - origin,
                    time_percent=percent,
                    memory_diff=memory_diff if has_memory else None,
                    memory_peak=(cp.memory_peak or 0) if has_memory else None,
                )
            )
        return rows

    def get_average_data(self) -> List[AverageRow]:
        self._require_finished()
        checkpoints = self._stopwatch.get_checkpoints()
        if not checkpoints:
            return []

        has_memory = checkpoints[0].memory is not None
        counts: Dict[str, int] = {}
        for cp in checkpoints:
            if cp.name in RESERVED_NAMES:
                continue
            counts[cp.name] = counts.get(cp.name, 0) + 1

        rows: List[AverageRow] = []
        for name, count in counts.items():
            average_memory = None
            disabled = False
            if has_memory:
                try:
                    average_memory = self._stopwatch.get_average_checkpoint_memory_diff(name)
                except MemoryProfilingDisabledError:
                    disabled = True
            rows.append(
                AverageRow(
                    name=name,
                    count=count,
                    average_duration=self._stopwatch.get_average_checkpoint_time(name),
                    average_memory_diff=average_memory,
                    memory_tracked=has_memory,
                    memory_disabled=disabled,
                )
            )
        return rows

    # ------------------------------------------------------------------ #
    # text output
    # ------------------------------------------------------------------ #

    def render_text_table(
        self, min_col_width: int | None = None, max_col_width: int | None = None
    ) -> str:
        return self._draw_text_table(
            self.get_formatted_data(), "CHECKPOINT DATA", min_col_width, max_col_width
        )

    def render_text_average_table(
        self, min_col_width: int | None = None, max_col_width: int | None = None
    ) -> str:
        return self._draw_text_table(
            self.get_average_data(), "AVERAGE DATA", min_col_width, max_col_width
        )

    def _draw_text_table(
        self,
        rows: Sequence[CheckpointRow | AverageRow],
        title: str,
        min_col_width: int | None,
        max_col_width: int | None,
    ) -> str:
        min_width = self.min_col_width if min_col_width is None else min_col_width
        max_width = self.max_col_width if max_col_width is None else max_col_width
        if not rows:
            return f"\n--- {title} ---\nNo data available.\n"

        headers = rows[0].headers()
        table = [row.cells() for row in rows]
        widths = [max(min_width, len(header)) for header in headers]
        for cells in table:
            for index, value in enumerate(cells):
                widths[index] = min(max(widths[index], len(value)), max_width)

        header_row = "| " + " | ".join(h.ljust(w) for h, w in zip(headers, widths)) + " |"
        separator = "-" * len(header_row)
        lines = ["", f"--- {title} ---", separator, header_row, separator]
        for cells in table:
            padded = [truncate(cells[0], widths[0]).ljust(widths[0])]
            padded += [value.rjust(width) for value, width in zip(cells[1:], widths[1:])]
            lines.append("| " + " | ".join(padded) + " |")
        lines.append(separator)
        return "\n".join(lines) + "\n"

    # ------------------------------------------------------------------ #
    # HTML output
    # ------------------------------------------------------------------ #

    def render_html_table(self, inject_css: bool = False) -> str:
        rows = self.get_formatted_data()
        if not rows:
            return "<p>Stopwatch data is empty.</p>"

        parts = [self._style_block() if inject_css else ""]
        parts.append(f'<table class="{self.TABLE_CLASS}">')
        parts.append(self._html_head(rows[0].headers(), self.HEADER_CLASS))
        parts.append("<tbody>")
        for row in rows:
            row_class = self.ROW_CLASS
            if row.name == "start":
                row_class += f" {self.START_ROW_CLASS}"
            elif row.name == "end":
                row_class += f" {self.END_ROW_CLASS}"
            parts.append(self._html_row(row.cells(), row_class))
        parts.append("</tbody></table>")
        parts.append(self.render_html_average_table())
        return "".join(parts)

    def render_html_average_table(self, inject_css: bool = False) -> str:
        rows = self.get_average_data()
        if not rows:
            return ""

        parts = [self._style_block() if inject_css else ""]
        parts.append(f'<h3 class="{self.AVERAGE_TITLE_CLASS}">Average Checkpoint Data</h3>')
        parts.append(f'<table class="{self.AVERAGE_TABLE_CLASS}">')
        parts.append(self._html_head(rows[0].headers(), self.AVERAGE_HEADER_CLASS))
        parts.append("<tbody>")
        for row in rows:
            parts.append(self._html_row(row.cells(), self.ROW_CLASS))
        parts.append("</tbody></table>")
        return "".join(parts)

    def _html_head(self, headers: Sequence[str], header_class: str) -> str:
        cells = "".join(
            f'<th class="{self.CELL_CLASS} {header_class}">{escape(header)}</th>'
            for header in headers
        )
        return f'<thead><tr class="{header_class}">{cells}</tr></thead>'

    def _html_row(self, cells: Sequence[str], row_class: str) -> str:
        html = [f'<tr class="{row_class}">']
        for index, value in enumerate(cells):
            align = self.NAME_CELL_CLASS if index == 0 else self.DATA_CELL_CLASS
            html.append(f'<td class="{self.CELL_CLASS} {align}">{escape(value)}</td>')
        html.append("</tr>")
        return "".join(html)

    # ------------------------------------------------------------------ #
    # CSS
    # ------------------------------------------------------------------ #

    def css_rules(self) -> Dict[str, Dict[str, str]]:
        return {
            f".{self.TABLE_CLASS}, .{self.AVERAGE_TABLE_CLASS}": {
                "width": "100%",
                "border-collapse": "collapse",
                "font-family": "monospace",
                "font-size": "14px",
                "margin-bottom": "20px",
            },
            f".{self.CELL_CLASS}": {
                "padding": "8px",
                "border": "1px solid #ddd",
            },
            f".{self.HEADER_CLASS} th": {
                "background-color": "#f2f2f2",
                "text-align": "left",
                "font-weight": "bold",
            },
            f".{self.AVERAGE_HEADER_CLASS} th": {
                "background-color": "#e6f7ff",
            },
            f".{self.DATA_CELL_CLASS}": {"text-align": "right"},
            f".{self.NAME_CELL_CLASS}": {"text-align": "left"},
            f".{self.START_ROW_CLASS}": {"background-color": "#e0ffe0"},
            f".{self.END_ROW_CLASS}": {"background-color": "#ffcccc"},
            f".{self.AVERAGE_TITLE_CLASS}": {
                "margin-top": "30px",
                "margin-bottom": "10px",
                "font-size": "1.2em",
                "font-family": "sans-serif",
            },
        }

    def get_css(self) -> str:
        """Stylesheet that makes the HTML tables readable without extra assets."""
        blocks = []
        for selector, properties in self.css_rules().items():
            body = "".join(f"    {name}: {value};\n" for name, value in properties.items())
            blocks.append(f"{selector} {{\n{body}}}\n")
        return "".join(blocks)

    def _style_block(self) -> str:
        return f"<style>\n{self.get_css()}</style>"

    # ------------------------------------------------------------------ #
    # whole-object output
    # ------------------------------------------------------------------ #

    def render(self, mode: OutputMode) -> str:
        """Render both tables; empty while the stopwatch is still running."""
        if self._stopwatch.is_running():
            return ""
        if mode is OutputMode.TERMINAL:
            return self.render_text_table() + self.render_text_average_table()
        logger.debug("Rendering stopwatch as HTML")
        return self.render_html_table(inject_css=True)
