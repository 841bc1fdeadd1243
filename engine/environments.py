"""LaTeX block environments (center, tabular) to HTML.

Runs before any other content stage: the `&` and `\\\\` inside a tabular
body would otherwise be picked up as text or math delimiters.
"""
import logging
import re
from dataclasses import dataclass, field

from engine.newlines import LINE_BREAK, unescape_newlines

logger = logging.getLogger(__name__)

CENTER_RE = re.compile(r'\\begin\{center\}(.*?)\\end\{center\}', re.DOTALL)
TABULAR_RE = re.compile(
    r'\\begin\{tabular\}\{((?:[^{}]|\{[^{}]*\})*)\}(.*?)\\end\{tabular\}',
    re.DOTALL,
)
# One level of nested braces is enough for \textbf{..} or $\frac{a}{b}$ in a cell
MULTICOLUMN_RE = re.compile(
    r'\\multicolumn\{\s*(\d+)\s*\}\{([^{}]*)\}\{((?:[^{}]|\{(?:[^{}]|\{[^{}]*\})*\})*)\}'
)
ROW_SEPARATOR = '\\\\'
HLINE_ONLY_RE = re.compile(r'^(?:\s*\\hline)+\s*$')
LEADING_HLINE_RE = re.compile(r'^\s*\\hline')
TRAILING_HLINE_RE = re.compile(r'\\hline\s*$')
CLINE_RE = re.compile(r'\\cline\{[^{}]*\}')
HLINE_RE = re.compile(r'\\hline')
COLSPEC_RE = re.compile(r'([lcr])|([pmb])\{[^{}]*\}|[X]')
PLACEHOLDER = '\x00MC{}\x00'
PLACEHOLDER_RE = re.compile(r'\x00MC(\d+)\x00')

ALIGNMENTS = {'l': 'left', 'c': 'center', 'r': 'right'}
DEFAULT_ALIGNMENT = 'center'

BORDER = '1px solid #000'
TABLE_STYLE = 'border-collapse: collapse; margin: 0.5em auto;'
CELL_PADDING = 'padding: 4px 8px;'


@dataclass
class TableCell:
    content: str
    col_span: int = 1
    alignment: str = DEFAULT_ALIGNMENT


@dataclass
class TableRow:
    cells: list = field(default_factory=list)
    has_top_border: bool = False
    has_bottom_border: bool = False


def convert_environments(text, stats=None):
    """Replace every center and tabular environment in text with HTML.

    When a stats dict is passed, 'tables' and 'centers' are incremented by
    the number of environments actually converted.
    """
    if not text:
        return text
    tables = centers = 0
    if '\\begin{tabular}' in text:
        text, tables = TABULAR_RE.subn(
            lambda m: convert_tabular(m.group(1), m.group(2)), text)
    if '\\begin{center}' in text:
        text, centers = CENTER_RE.subn(lambda m: convert_center(m.group(1)), text)
    if stats is not None:
        stats['tables'] = stats.get('tables', 0) + tables
        stats['centers'] = stats.get('centers', 0) + centers
    return text


def convert_center(inner):
    """Wrap a center body in a centered div, one line break per newline.

    Newlines at the very start and end of the body only separate it from the
    \\begin/\\end markers and are trimmed, not turned into breaks.
    """
    inner = unescape_newlines(inner).replace('\r\n', '\n')
    lines = inner.strip('\n').split('\n')
    return ('<div class="latex-center" style="text-align: center;">'
            + LINE_BREAK.join(lines) + '</div>')


def parse_colspec(colspec):
    """Return (bordered, [alignment per column]) for a tabular column spec."""
    bordered = '|' in colspec
    columns = []
    for m in COLSPEC_RE.finditer(colspec):
        if m.group(1):
            columns.append(ALIGNMENTS[m.group(1)])
        else:
            columns.append('left')
    return bordered, columns


def convert_tabular(colspec, body):
    bordered, columns = parse_colspec(colspec)
    rows = parse_rows(body, columns)
    if not rows:
        rows = parse_rows_simple(body, columns)
        logger.debug('tabular: hline-aware parse found no rows, fallback gave %d',
                     len(rows))
    return build_table(rows, bordered)


def parse_rows(body, columns=None):
    """Split a tabular body into TableRows, honouring \\hline borders.

    An \\hline-only part borders the row before it (bottom) and the row
    after it (top). Inline leading/trailing \\hline on a row do the same.
    """
    rows = []
    pending_top = False
    for part in body.split(ROW_SEPARATOR):
        part = CLINE_RE.sub('', part)
        if HLINE_ONLY_RE.match(part):
            if rows:
                rows[-1].has_bottom_border = True
            pending_top = True
            continue
        if not part.strip():
            continue

        top = pending_top
        bottom = False
        pending_top = False
        while LEADING_HLINE_RE.match(part):
            part = LEADING_HLINE_RE.sub('', part, count=1)
            top = True
        while TRAILING_HLINE_RE.search(part):
            part = TRAILING_HLINE_RE.sub('', part, count=1)
            bottom = True
            pending_top = True
        if not part.strip():
            # "\hline \hline" style parts reduce to nothing
            if rows:
                rows[-1].has_bottom_border = True
            pending_top = True
            continue

        if top and rows:
            rows[-1].has_bottom_border = True
        rows.append(TableRow(cells=parse_cells(part, columns),
                             has_top_border=top, has_bottom_border=bottom))
    return rows


def parse_rows_simple(body, columns=None):
    """Best-effort rows for malformed bodies: no border semantics."""
    rows = []
    for part in body.split(ROW_SEPARATOR):
        part = CLINE_RE.sub('', HLINE_RE.sub('', part))
        if part.strip():
            rows.append(TableRow(cells=parse_cells(part, columns)))
    return rows


def parse_cells(row_text, columns=None):
    """Split one row on `&`, keeping \\multicolumn contents intact."""
    columns = columns or []
    spans = {}

    def stash(m):
        key = len(spans)
        spans[key] = (max(int(m.group(1)), 1), _multicolumn_alignment(m.group(2)),
                      m.group(3).strip())
        return PLACEHOLDER.format(key)

    protected = MULTICOLUMN_RE.sub(stash, row_text)
    cells = []
    col = 0
    for raw in protected.split('&'):
        raw = raw.strip()
        m = PLACEHOLDER_RE.search(raw)
        if m:
            span, alignment, _ = spans[int(m.group(1))]
            # Text around the placeholder stays in the spanning cell
            content = PLACEHOLDER_RE.sub(lambda mm: spans[int(mm.group(1))][2], raw)
            cells.append(TableCell(content=content, col_span=span, alignment=alignment))
            col += span
        else:
            alignment = columns[col] if col < len(columns) else DEFAULT_ALIGNMENT
            cells.append(TableCell(content=raw, alignment=alignment))
            col += 1
    return cells


def _multicolumn_alignment(spec):
    m = COLSPEC_RE.search(spec)
    if not m:
        return DEFAULT_ALIGNMENT
    return ALIGNMENTS[m.group(1)] if m.group(1) else 'left'


def build_table(rows, bordered):
    table_style = TABLE_STYLE + (f' border: {BORDER};' if bordered else '')
    cell_border = f' border: {BORDER};' if bordered else ''
    parts = [f'<table class="latex-table" style="{table_style}">']
    for row in rows:
        row_style = ''
        if row.has_top_border:
            row_style += f'border-top: {BORDER};'
        if row.has_bottom_border:
            row_style += f'{" " if row_style else ""}border-bottom: {BORDER};'
        parts.append(f'<tr style="{row_style}">' if row_style else '<tr>')
        for cell in row.cells:
            parts.append(
                f'<td colspan="{cell.col_span}" '
                f'style="text-align: {cell.alignment}; {CELL_PADDING}{cell_border}">'
                f'{cell.content}</td>'
            )
        parts.append('</tr>')
    parts.append('</table>')
    return ''.join(parts)
