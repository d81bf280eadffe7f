"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Palette overrides via TASKLOG_PRIMARY / TASKLOG_TASK / TASKLOG_LOG, read
  from the environment or the project .env file (see config).
"""
from __future__ import annotations
import re
import sys
from config import env_value, parse_bool

_HEX_RE = re.compile(r'^#?[0-9a-fA-F]{6}$')

_FORCE = parse_bool(env_value('FORCE_COLOR'), False)
_NO_COLOR = env_value('NO_COLOR') is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = (env_value('COLORTERM') or '').lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    """Generate ANSI escape code for a given style part."""
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    """Convert a hex color code to an RGB tuple."""
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_truecolor(r: int, g: int, b: int) -> str:
    return f"\033[38;2;{r};{g};{b}m"

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    r6, g6, b6 = to_6(r), to_6(g), to_6(b)
    return f"\033[38;5;{16 + 36 * r6 + 6 * g6 + b6}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return _fg_truecolor(r, g, b)
    return _fg_256(r, g, b)

def resolve_hex(name: str, default: str) -> str:
    """Hex override for name if it is a valid 6-digit color, else default."""
    raw = (env_value(name) or '').strip()
    if raw and _HEX_RE.match(raw):
        return '#' + raw.lstrip('#')
    return default

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_TASK_DEFAULT = '#48B3AF'
HEX_LOG_DEFAULT = '#A7E399'

HEX_PRIMARY = resolve_hex('TASKLOG_PRIMARY', HEX_PRIMARY_DEFAULT)
HEX_TASK = resolve_hex('TASKLOG_TASK', HEX_TASK_DEFAULT)
HEX_LOG = resolve_hex('TASKLOG_LOG', HEX_LOG_DEFAULT)

PRIMARY = _from_hex(HEX_PRIMARY)

LIST_COLOR = {
    'tasks': _from_hex(HEX_TASK),
    'logs': _from_hex(HEX_LOG),
}

HEADER_COLOR = PRIMARY
NUMBER_COLOR = PRIMARY + BOLD
EMPTY_COLOR = DIM + PRIMARY
WARNING_COLOR = _code('33') + BOLD

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','resolve_hex','RESET','BOLD','DIM','LIST_COLOR','HEADER_COLOR','NUMBER_COLOR',
    'EMPTY_COLOR','WARNING_COLOR','HEX_PRIMARY','HEX_TASK','HEX_LOG','_ENABLE','_USE_TRUECOLOR','_FORCE'
]
