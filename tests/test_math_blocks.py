"""Tests for engine/math_blocks.py — delimiter scanning and overlap rules."""
from itertools import combinations

from engine.math_blocks import (find_math_blocks, split_segments, unescape_latex,
                                INLINE, DISPLAY)


def test_double_dollar_is_one_display_block():
    blocks = find_math_blocks('$$x^2$$')
    assert len(blocks) == 1
    assert blocks[0].kind == DISPLAY
    assert blocks[0].latex_body == 'x^2'
    assert (blocks[0].start, blocks[0].end) == (0, 7)


def test_single_dollar_inline():
    blocks = find_math_blocks(r'The value is $\frac{\pi}{4}$ approx.')
    assert len(blocks) == 1
    assert blocks[0].kind == INLINE
    assert blocks[0].latex_body == r'\frac{\pi}{4}'
    assert blocks[0].source == r'$\frac{\pi}{4}$'


def test_bracket_and_paren_delimiters():
    blocks = find_math_blocks(r'\[a+b\] and \(c\)')
    assert [(b.kind, b.latex_body) for b in blocks] == [(DISPLAY, 'a+b'), (INLINE, 'c')]


def test_bracket_wins_over_dollar_inside():
    blocks = find_math_blocks(r'\[ $x$ \]')
    assert len(blocks) == 1
    assert blocks[0].kind == DISPLAY


def test_inline_after_display_not_lost():
    blocks = find_math_blocks('$$a$$ and $b$')
    assert [(b.kind, b.latex_body) for b in blocks] == [(DISPLAY, 'a'), (INLINE, 'b')]


def test_blocks_sorted_by_start():
    blocks = find_math_blocks(r'$a$ then \[b\] then $$c$$ then \(d\)')
    starts = [b.start for b in blocks]
    assert starts == sorted(starts)
    assert len(blocks) == 4


def test_blocks_never_overlap():
    texts = [
        r'$$a$$$b$ \[$c$\] \($$d$$\) $e$$f$',
        r'$x \( y $ z \)',
        r'\[ \( a \] \)',
        '$$$$$ $ $$',
    ]
    for text in texts:
        blocks = find_math_blocks(text)
        for a, b in combinations(blocks, 2):
            assert a.end <= b.start or b.end <= a.start, text


def test_escaped_dollar_not_a_delimiter():
    assert find_math_blocks(r'costs \$5 and \$6') == []


def test_empty_body_ignored():
    assert find_math_blocks(r'\[ \]') == []


def test_doubled_backslashes_unescaped():
    blocks = find_math_blocks(r'$\\frac{1}{2}$')
    assert blocks[0].latex_body == r'\frac{1}{2}'
    assert unescape_latex(r'\\alpha \\beta') == r'\alpha \beta'


def test_multiline_display():
    blocks = find_math_blocks('\\[a\n+ b\\]')
    assert blocks[0].latex_body == 'a\n+ b'


def test_no_math():
    assert find_math_blocks('plain text') == []
    assert find_math_blocks('') == []


def test_split_segments_rebuilds_text():
    text = r'x $a$ y \[b\] z'
    segments = split_segments(text)
    kinds = [k for k, _ in segments]
    assert kinds == ['text', 'math', 'text', 'math', 'text']
    rebuilt = ''.join(v if k == 'text' else v.source for k, v in segments)
    assert rebuilt == text


def test_identifier_encodes_kind_and_offset():
    blocks = find_math_blocks('ab $c$')
    assert blocks[0].identifier == 'inline-3'
