"""Tests for services/content_pipeline.py — the full environments/newlines/math chain."""
import re

from engine.newlines import LINE_BREAK
from services.content_pipeline import render_content, render_content_with_stats


def test_end_to_end_example():
    result = render_content(r'The value is $\frac{\pi}{4}$ approx.')
    assert result.startswith('The value is <span class="math-inline" data-latex="\\frac{\\pi}{4}">')
    assert result.endswith(' approx.')


def test_table_cells_keep_their_math():
    text = r'\begin{tabular}{|c|c|}\hline $x$ & $x^2$ \\ \hline\end{tabular}'
    result = render_content(text)
    assert result.startswith('<table')
    cells = re.findall(r'<td[^>]*>(.*?)</td>', result)
    assert len(cells) == 2
    assert all('math-inline' in c for c in cells)


def test_newline_in_table_cell_not_broken():
    text = '\\begin{tabular}{c}a\nb & c\\end{tabular}'
    result = render_content(text)
    assert '<br>' not in result
    assert 'a\nb' in result


def test_literal_newline_before_math():
    result = render_content(r'Find x:\n$x+1=2$')
    assert result.startswith(f'Find x:{LINE_BREAK}<span class="math-inline"')


def test_center_with_math():
    result = render_content(r'\begin{center}$a^2$\end{center}')
    assert result.startswith('<div class="latex-center"')
    assert 'math-inline' in result


def test_html_passthrough():
    text = '<p><strong>Bold</strong> text</p>'
    assert render_content(text) == text


def test_malformed_math_degrades():
    result = render_content(r'Broken $\frac{1}{2$ here')
    assert result == r'Broken $\frac{1}{2$ here'


def test_none_and_empty():
    assert render_content(None) == ''
    assert render_content('') == ''


def test_non_string_coerced():
    assert render_content(42) == '42'


def test_stats():
    text = (r'\begin{tabular}{c}1\end{tabular}\begin{center}c\end{center}'
            r'$a$ $$b$$ \(\frac{\)')
    _, stats = render_content_with_stats(text)
    assert stats == {'tables': 1, 'centers': 1, 'math_blocks': 3, 'math_failures': 1}


def test_inequalities_keep_later_line_breaks():
    result = render_content('$x<y$ and $y>z$\nnext\nline')
    assert result.count('<br>') == 2
    assert result.endswith(f'next{LINE_BREAK}line')


def test_stats_ignore_unterminated_environments():
    _, stats = render_content_with_stats(r'\begin{tabular}{c}1 \begin{center}x')
    assert stats['tables'] == 0
    assert stats['centers'] == 0
