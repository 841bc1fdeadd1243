"""Find delimited math regions in content.

Patterns are tried in a fixed priority order and the first accepted block
wins any overlap, so `$$x$$` is one display block rather than two inline
ones. Accepted blocks never overlap.
"""
import re
from dataclasses import dataclass

INLINE = 'inline'
DISPLAY = 'display'

# (name, kind, pattern) in priority order
DELIMITERS = [
    ('bracket', DISPLAY, re.compile(r'\\\[(.+?)\\\]', re.DOTALL)),
    ('paren', INLINE, re.compile(r'\\\((.+?)\\\)', re.DOTALL)),
    ('dollars', DISPLAY, re.compile(r'(?<!\\)\$\$([^$]+?)\$\$')),
    ('dollar', INLINE, re.compile(r'(?<![\\$])\$([^$]+?)(?<!\\)\$')),
]


@dataclass
class MathBlock:
    identifier: str
    latex_body: str
    start: int
    end: int
    kind: str
    source: str = ''

    def overlaps(self, start, end):
        return start < self.end and self.start < end


def find_math_blocks(text):
    """Return accepted MathBlocks sorted by start offset.

    `latex_body` has doubled backslashes collapsed; `source` is the exact
    delimited text so it can be left in place if typesetting fails.
    """
    if not text:
        return []
    blocks = []
    for name, kind, pattern in DELIMITERS:
        pos = 0
        while True:
            m = pattern.search(text, pos)
            if not m:
                break
            start, end = m.span()
            if any(b.overlaps(start, end) for b in blocks):
                # Retry one char on so a valid match hidden behind this one is found
                pos = start + 1
                continue
            body = m.group(1)
            if body.strip():
                blocks.append(MathBlock(
                    identifier=f'{kind}-{start}',
                    latex_body=unescape_latex(body),
                    start=start,
                    end=end,
                    kind=kind,
                    source=m.group(0),
                ))
            pos = end
    blocks.sort(key=lambda b: b.start)
    return blocks


def unescape_latex(body):
    """Collapse doubled backslashes left over from string escaping."""
    return body.replace('\\\\', '\\')


def split_segments(text, blocks=None):
    """Flatten text into ('text', str) and ('math', MathBlock) segments.

    Walking the segments once rebuilds the output without any offset
    bookkeeping.
    """
    if blocks is None:
        blocks = find_math_blocks(text)
    segments = []
    pos = 0
    for block in blocks:
        if block.start > pos:
            segments.append(('text', text[pos:block.start]))
        segments.append(('math', block))
        pos = block.end
    if pos < len(text):
        segments.append(('text', text[pos:]))
    return segments
