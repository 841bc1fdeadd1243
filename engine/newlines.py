"""Newline normalization for mixed HTML/LaTeX content.

A single forward scan with two states:

    TEXT     plain text, newlines become line breaks when no element is open
    IN_CELL  inside an open <td>/<th>, newlines kept as-is

Complete HTML tags and delimited math regions are copied whole, so a `<` in
`$x<y$` is never taken for a tag. Element depth is tracked alongside the
state so a newline inside any other open element is left alone as well.
"""
import re

from engine.math_blocks import find_math_blocks

LINE_BREAK = '<br><span class="line-spacer"></span>'

TEXT = 'text'
IN_CELL = 'in_cell'

VOID_TAGS = {
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input',
    'link', 'meta', 'source', 'track', 'wbr',
}
CELL_TAGS = {'td', 'th'}

# Complete tags only: a "<" with no closing ">" before the next "<" is text
TAG_RE = re.compile(
    r"<!--.*?-->|<![^<>]*>"
    r"|</?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>]*)?/?>",
    re.DOTALL,
)
TAG_NAME_RE = re.compile(r'^<\s*(/?)\s*([A-Za-z][A-Za-z0-9-]*)')

# Control words starting with "n" that must survive \n unescaping
_N_COMMANDS = (
    'u', 'e', 'eq', 'abla', 'eg', 'ot', 'otin', 'i', 'less', 'gtr', 'mid',
    'parallel', 'subseteq', 'supseteq', 'leq', 'geq', 'leftarrow',
    'rightarrow', 'Leftarrow', 'Rightarrow', 'ewline', 'olimits', 'ormalsize',
    'earrow', 'warrow', 'atural', 'exists', 'sim', 'cong', 'prec', 'succ',
    'vdash', 'ormal', 'ewcommand', 'onumber',
)
LITERAL_NEWLINE_RE = re.compile(
    r'\\n(?!(?:' + '|'.join(sorted(_N_COMMANDS, key=len, reverse=True))
    + r')(?![A-Za-z]))'
)


def unescape_newlines(text):
    r"""Turn literal two-character `\n` escapes into real newlines.

    `\nu`, `\neq`, `\nabla` and friends are LaTeX, not escapes.
    """
    if '\\n' not in text:
        return text
    return LITERAL_NEWLINE_RE.sub('\n', text)


def normalize_newlines(text):
    """Replace newlines outside HTML tags, open elements and cells with LINE_BREAK."""
    if not text:
        return text
    text = unescape_newlines(text).replace('\r\n', '\n')
    if '\n' not in text:
        return text

    out = []
    state = TEXT
    depth = 0
    cells = 0
    math_ends = {b.start: b.end for b in find_math_blocks(text)}
    n = len(text)
    i = 0
    while i < n:
        end = math_ends.get(i)
        if end is not None:
            out.append(text[i:end])
            i = end
            continue
        ch = text[i]
        if ch == '<':
            m = TAG_RE.match(text, i)
            if m:
                depth, cells = _apply_tag(m.group(0), depth, cells)
                out.append(m.group(0))
                state = IN_CELL if cells > 0 else TEXT
                i = m.end()
                continue
            out.append(ch)
        elif ch == '\n':
            if state == IN_CELL or depth > 0:
                out.append(ch)
            else:
                out.append(LINE_BREAK)
        else:
            out.append(ch)
        i += 1
    return ''.join(out)


def _apply_tag(tag, depth, cells):
    """Return updated (depth, cells) after consuming one complete tag."""
    m = TAG_NAME_RE.match(tag)
    if not m:
        # comments, doctype
        return depth, cells
    closing, name = m.group(1), m.group(2).lower()
    if closing:
        if name in VOID_TAGS:
            return depth, cells
        depth = max(depth - 1, 0)
        if name in CELL_TAGS:
            cells = max(cells - 1, 0)
        return depth, cells
    if name in VOID_TAGS or tag.rstrip('>').rstrip().endswith('/'):
        return depth, cells
    depth += 1
    if name in CELL_TAGS:
        cells += 1
    return depth, cells
