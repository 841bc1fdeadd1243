"""Raw question content -> safe HTML.

Three stages, each working on the previous stage's output:
environments (center/tabular) -> newlines -> math.
"""
import logging

from engine.environments import convert_environments
from engine.newlines import normalize_newlines
from services.math_renderer import render_math_in_text

logger = logging.getLogger(__name__)


def render_content(raw):
    """Render raw stem/option/explanation text to HTML."""
    html, _ = render_content_with_stats(raw)
    return html


def render_content_with_stats(raw):
    """Like render_content, also returning counts for the preview API.

    Returns (html, stats) where stats has tables, centers, math_blocks
    and math_failures.
    """
    stats = {'tables': 0, 'centers': 0, 'math_blocks': 0, 'math_failures': 0}
    if raw is None:
        return '', stats
    if not isinstance(raw, str):
        raw = str(raw)
    if not raw:
        return '', stats

    text = convert_environments(raw, stats=stats)
    text = normalize_newlines(text)
    text = render_math_in_text(text, stats=stats)

    if stats['math_failures']:
        logger.info('Rendered content with %d/%d math failures',
                    stats['math_failures'], stats['math_blocks'])
    return text, stats
