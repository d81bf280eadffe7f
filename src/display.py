"""Terminal surface: entry field, submit control, task list and log list.

The surface only stores rows and draws them; it never touches the
collections. Row positions shown on screen are 1-based and are what the
REPL passes to delete_row().
"""
from typing import Callable, Dict, List, Mapping, Optional, Tuple
from models import Row
from theme import color, HEADER_COLOR, LIST_COLOR, NUMBER_COLOR, EMPTY_COLOR, BOLD
import re, shutil

TASKS = 'tasks'
LOGS = 'logs'
LISTS: Tuple[str, ...] = (TASKS, LOGS)
HEADER_TITLES: Dict[str, str] = {TASKS: "TASKS", LOGS: "LOG"}
MIN_COL_WIDTH = 18
SEP = " | "
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


class TerminalSurface:
    def __init__(self):
        self.entry: str = ''
        self.lists: Dict[str, List[Row]] = {TASKS: [], LOGS: []}
        self.alerts: List[str] = []
        self._submit_handler: Optional[Callable[[], None]] = None

    # -------------------- entry field / submit control --------------------
    def read_entry(self) -> str:
        return self.entry

    def set_entry(self, text: str) -> None:
        self.entry = text

    def clear_entry(self) -> None:
        self.entry = ''

    def on_submit(self, handler: Callable[[], None]) -> None:
        self._submit_handler = handler

    def submit(self) -> None:
        """Button click / Enter key: fire the bound submit handler."""
        if self._submit_handler is not None:
            self._submit_handler()

    # -------------------- rows --------------------
    def append_row(self, list_name: str, label: str, on_delete: Callable[[Row], None]) -> Row:
        if list_name not in self.lists:
            raise KeyError(f'Unknown list: {list_name}')
        row = Row(list_name=list_name, label=label, on_delete=on_delete)
        self.lists[list_name].append(row)
        return row

    def remove_row(self, row: Row) -> None:
        rows = self.lists.get(row.list_name, [])
        for i, existing in enumerate(rows):
            if existing is row:
                del rows[i]
                return

    def rows(self, list_name: str) -> List[Row]:
        return list(self.lists[list_name])

    def labels(self, list_name: str) -> List[str]:
        return [row.label for row in self.lists[list_name]]

    def delete_row(self, list_name: str, position: int) -> bool:
        """Activate the delete control of the 1-based row at position."""
        rows = self.lists[list_name]
        idx = position - 1
        if idx < 0 or idx >= len(rows):
            return False
        rows[idx].delete()
        return True

    # -------------------- warnings --------------------
    def alert(self, message: str) -> None:
        self.alerts.append(message)

    def take_alerts(self) -> List[str]:
        pending, self.alerts = self.alerts, []
        return pending

    # -------------------- display --------------------
    def render(self, term_width: Optional[int] = None) -> List[str]:
        if term_width is None:
            term_width = shutil.get_terminal_size((120, 30)).columns
        widths = self._compute_column_widths(term_width)
        wrapped = self._wrap_all_columns(widths)
        return self._render(widths, wrapped)

    # ---- width calculation ----
    def _compute_column_widths(self, term_width: int) -> Dict[str, int]:
        sep_total = len(SEP) * (len(LISTS) - 1)
        widths: Dict[str, int] = {}
        for name in LISTS:
            longest = len(HEADER_TITLES[name])
            for pos, row in enumerate(self.lists[name], start=1):
                candidate = len(self._prefix(pos)) + len(row.label)
                if candidate > longest:
                    longest = candidate
            widths[name] = max(MIN_COL_WIDTH, longest)
        total = sum(widths.values()) + sep_total
        if total > term_width:
            target_space = max(term_width - sep_total, len(LISTS) * MIN_COL_WIDTH)
            while sum(widths.values()) > target_space:
                widest = max(LISTS, key=lambda s: widths[s])
                if widths[widest] <= MIN_COL_WIDTH:
                    break
                widths[widest] -= 1
        else:
            extra = term_width - total
            i = 0
            while extra > 0:
                widths[LISTS[i % len(LISTS)]] += 1
                extra -= 1
                i += 1
        return widths

    # ---- wrapping ----
    @staticmethod
    def _prefix(pos: int) -> str:
        return f"{pos}. "

    def _wrap_all_columns(self, widths: Mapping[str, int]) -> Dict[str, List[str]]:
        wrapped: Dict[str, List[str]] = {}
        for name in LISTS:
            if not self.lists[name]:
                wrapped[name] = [color('(empty)', EMPTY_COLOR)]
                continue
            acc: List[str] = []
            for pos, row in enumerate(self.lists[name], start=1):
                acc.extend(self._wrap_row(pos, row, widths[name]))
            wrapped[name] = acc
        return wrapped

    def _wrap_row(self, pos: int, row: Row, col_width: int) -> List[str]:
        prefix = self._prefix(pos)
        prefix_colored = color(f"{pos}.", NUMBER_COLOR, BOLD) + ' '
        row_col = LIST_COLOR.get(row.list_name, '')
        limit = max(1, col_width - len(prefix))
        lines_raw: List[str] = []
        current = ''
        for w in row.label.split():
            # hard-split words longer than the column
            while len(w) > limit:
                if current:
                    lines_raw.append(current)
                    current = ''
                lines_raw.append(w[:limit])
                w = w[limit:]
            candidate = w if not current else current + ' ' + w
            if len(candidate) <= limit:
                current = candidate
            else:
                lines_raw.append(current)
                current = w
        if current:
            lines_raw.append(current)
        if not lines_raw:
            return [prefix_colored + color('<empty>', row_col)]
        indent = ' ' * len(prefix)
        return [(prefix_colored if i == 0 else indent) + color(line, row_col)
                for i, line in enumerate(lines_raw)]

    # ---- rendering ----
    def _render(self, widths: Mapping[str, int], wrapped_lines: Mapping[str, List[str]]) -> List[str]:
        out: List[str] = []
        rows = max(len(wrapped_lines[s]) for s in LISTS)
        header_cells = [self._pad(color(HEADER_TITLES[s], HEADER_COLOR, BOLD), widths[s]) for s in LISTS]
        out.append(SEP.join(header_cells))
        out.append(SEP.join(color('-' * widths[s], HEADER_COLOR) for s in LISTS))
        for r in range(rows):
            cells: List[str] = []
            for s in LISTS:
                col_lines = wrapped_lines[s]
                cells.append(self._pad(col_lines[r], widths[s]) if r < len(col_lines) else ' ' * widths[s])
            out.append(SEP.join(cells).rstrip())
        return out

    def _pad(self, text: str, width: int) -> str:
        pad = width - self._visible_len(text)
        return text + ' ' * pad if pad > 0 else text

    @staticmethod
    def _visible_len(s: str) -> int:
        return len(ANSI_RE.sub('', s))

    def __str__(self) -> str:
        return f'Tasks: {len(self.lists[TASKS])} rows, Log: {len(self.lists[LOGS])} rows'
