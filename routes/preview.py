"""Content preview routes — live LaTeX editor and sample question page."""
import logging

from flask import Blueprint, render_template, request, jsonify

from config import settings
from services.content_pipeline import render_content_with_stats

logger = logging.getLogger(__name__)
preview_bp = Blueprint('preview', __name__)

DEFAULT_CONTENT = (
    r'The value is $\frac{\pi}{4}$ approx.\n'
    r'\begin{tabular}{|c|c|}\hline $x$ & $f(x)$ \\ \hline 0 & 1 \\ \hline\end{tabular}'
)


@preview_bp.route('/', methods=['GET', 'POST'])
def editor():
    content = request.form.get('content', DEFAULT_CONTENT)
    rendered, stats = render_content_with_stats(content[:settings.MAX_CONTENT_LENGTH])
    return render_template('preview/editor.html', content=content,
                           rendered=rendered, stats=stats)


@preview_bp.route('/render', methods=['POST'])
def render_api():
    data = request.get_json(silent=True) or {}
    content = data.get('content')
    if not isinstance(content, str):
        return jsonify({'error': 'content must be a string'}), 400
    if len(content) > settings.MAX_CONTENT_LENGTH:
        return jsonify({'error': 'content too long',
                        'max_length': settings.MAX_CONTENT_LENGTH}), 413
    rendered, stats = render_content_with_stats(content)
    logger.info('Preview render: %d chars, %d math blocks, %d failures',
                len(content), stats['math_blocks'], stats['math_failures'])
    return jsonify({'html': rendered, 'stats': stats})


@preview_bp.route('/question')
def sample_question():
    return render_template('preview/question.html',
                           question=settings.SAMPLE_QUESTION,
                           show_correct=request.args.get('answers') == '1')
