"""Server-side LaTeX math rendering using matplotlib's mathtext.

Finds \\[...\\], \\(...\\), $$...$$ and $...$ regions and replaces each with
an inline SVG wrapped in <span class="math-inline|math-display">.
Uses Figure() directly (not pyplot) for thread safety in Flask threaded mode.
No TeX installation required — matplotlib's built-in mathtext parser handles it.
"""
import base64
import html
import io
import logging
from functools import lru_cache

from matplotlib.figure import Figure
from matplotlib.backends.backend_svg import FigureCanvasSVG

from config.settings import RENDER_DEFAULTS
from engine.macros import repair_macros
from engine.math_blocks import DISPLAY, find_math_blocks, split_segments

logger = logging.getLogger(__name__)


@lru_cache(maxsize=RENDER_DEFAULTS['cache_size'])
def latex_to_svg(latex_expr, fontsize=16, display=False):
    """Render a LaTeX expression to an inline <img> tag with base64 SVG.

    Returns HTML string, or None when mathtext cannot parse the expression.
    """
    try:
        fig = Figure(figsize=(0.01, 0.01))
        fig.patch.set_alpha(0)
        FigureCanvasSVG(fig)
        fig.text(0, 0, f'${latex_expr}$', fontsize=fontsize,
                 math_fontfamily=RENDER_DEFAULTS['math_fontfamily'])
        buf = io.BytesIO()
        fig.savefig(buf, format='svg', bbox_inches='tight',
                    pad_inches=0.02, transparent=True)
        b64 = base64.b64encode(buf.getvalue()).decode('ascii')
        css_class = 'math-svg-display' if display else 'math-svg-inline'
        return (f'<img class="{css_class}" '
                f'src="data:image/svg+xml;base64,{b64}" '
                f'alt="{html.escape(latex_expr)}">')
    except Exception as exc:
        logger.warning('Failed to render LaTeX: %s — expr: %s', exc, latex_expr)
        return None


def typeset(latex, display=False):
    """Repair macros in latex and typeset it. None on failure."""
    repaired = repair_macros(latex.strip())
    fontsize = (RENDER_DEFAULTS['display_fontsize'] if display
                else RENDER_DEFAULTS['inline_fontsize'])
    return latex_to_svg(repaired, fontsize=fontsize, display=display)


def render_block(block):
    """HTML for one MathBlock, or its original source text if typesetting fails."""
    rendered = typeset(block.latex_body, display=block.kind == DISPLAY)
    if rendered is None:
        return block.source
    return (f'<span class="math-{block.kind}" '
            f'data-latex="{html.escape(block.latex_body, quote=True)}">'
            f'{rendered}</span>')


def render_math_in_text(text, stats=None):
    """Replace every delimited math region in text with rendered markup.

    When a stats dict is passed, 'math_blocks' and 'math_failures' are
    incremented as blocks are processed.
    """
    if not text or not isinstance(text, str):
        return text
    if '$' not in text and '\\(' not in text and '\\[' not in text:
        return text
    blocks = find_math_blocks(text)
    if not blocks:
        return text

    out = []
    for kind, value in split_segments(text, blocks):
        if kind == 'text':
            out.append(value)
            continue
        rendered = render_block(value)
        if stats is not None:
            stats['math_blocks'] = stats.get('math_blocks', 0) + 1
            if rendered == value.source:
                stats['math_failures'] = stats.get('math_failures', 0) + 1
        out.append(rendered)
    return ''.join(out)
