"""Display wrappers for rendered question content (stem, options, explanation, tips)."""
from markupsafe import Markup, escape

from services.content_pipeline import render_content

STEM_CLASS = 'question-stem'
EXPLANATION_CLASS = 'question-explanation'
TIPS_CLASS = 'question-tips'


def content_display(content, css_class=''):
    classes = f'latex-content-display {css_class}'.strip()
    return Markup(f'<div class="{escape(classes)}">{render_content(content)}</div>')


def question_stem(stem, css_class=''):
    return content_display(stem, f'{STEM_CLASS} {css_class}'.strip())


def question_explanation(explanation, css_class=''):
    return content_display(explanation, f'{EXPLANATION_CLASS} {css_class}'.strip())


def question_tips(tip_formula, css_class=''):
    return content_display(tip_formula, f'{TIPS_CLASS} {css_class}'.strip())


def option_letter(option, index):
    """Letter badge for an option: its order if set (and non-zero), else its index."""
    return chr(65 + (option.get('order') or index))


def question_option(option, index, show_correct=False, css_class=''):
    """Render one MCQ option with its letter badge.

    option is a dict with 'text', 'is_correct' and optional 'order'.
    """
    correct = show_correct and option.get('is_correct')
    badge_class = 'option-badge option-badge-correct' if correct else 'option-badge'
    text_class = 'option-text option-text-correct' if correct else 'option-text'
    classes = f'question-option {css_class}'.strip()
    return Markup(
        f'<div class="{escape(classes)}">'
        f'<span class="{badge_class}">{option_letter(option, index)}</span>'
        f'<div class="{text_class}">{content_display(option.get("text", ""))}</div>'
        f'</div>'
    )
