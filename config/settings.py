"""JEE Prep — centralized configuration."""
import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

SECRET_KEY = os.environ.get('SECRET_KEY', 'jeeprep-dev-key')

# Logging
LOG_FILE = os.environ.get('LOG_FILE', os.path.join(BASE_DIR, 'jeeprep_debug.log'))
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

# Largest content string the preview API will render
MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 200_000))

# Math typesetting
RENDER_DEFAULTS = {
    'inline_fontsize': int(os.environ.get('MATH_FONT_SIZE_INLINE', 16)),
    'display_fontsize': int(os.environ.get('MATH_FONT_SIZE_DISPLAY', 18)),
    'cache_size': int(os.environ.get('MATH_RENDER_CACHE_SIZE', 512)),
    'math_fontfamily': 'cm',
}

# Plain control-word renames applied before typesetting.
# Keys match whole control words only (\R never touches \Rightarrow).
MACRO_REPAIRS = {
    r'\farc': r'\frac',
    r'\fracc': r'\frac',
    r'\frca': r'\frac',
    r'\fract': r'\frac',
    r'\R': r'\mathbb{R}',
    r'\N': r'\mathbb{N}',
    r'\Z': r'\mathbb{Z}',
    r'\Q': r'\mathbb{Q}',
    r'\C': r'\mathbb{C}',
    r'\lt': '<',
    r'\gt': '>',
    r'\implies': r'\Rightarrow',
    r'\impliedby': r'\Leftarrow',
    r'\iff': r'\Leftrightarrow',
    r'\degree': r'^{\circ}',
    r'\dfrac': r'\frac',
    r'\tfrac': r'\frac',
}

# Argument macros: #1, #2 ... are filled from the following brace groups.
MATH_MACROS = {
    r'\xrightarrow': r'\overset{#1}{\rightarrow}',
    r'\xleftarrow': r'\overset{#1}{\leftarrow}',
    r'\xleftrightarrow': r'\overset{#1}{\leftrightarrow}',
    r'\xRightarrow': r'\overset{#1}{\Rightarrow}',
    r'\xLeftarrow': r'\overset{#1}{\Leftarrow}',
    r'\xLeftrightarrow': r'\overset{#1}{\Leftrightarrow}',
    r'\xhookrightarrow': r'\overset{#1}{\hookrightarrow}',
    r'\xhookleftarrow': r'\overset{#1}{\hookleftarrow}',
    r'\xrightharpoonup': r'\overset{#1}{\rightharpoonup}',
    r'\xrightharpoondown': r'\overset{#1}{\rightharpoondown}',
    r'\xleftharpoonup': r'\overset{#1}{\leftharpoonup}',
    r'\xleftharpoondown': r'\overset{#1}{\leftharpoondown}',
    r'\xrightleftharpoons': r'\overset{#1}{\rightleftharpoons}',
    r'\xleftrightharpoons': r'\overset{#1}{\leftrightharpoons}',
    r'\xmapsto': r'\overset{#1}{\mapsto}',
    r'\xlongequal': r'\overset{#1}{=}',
    r'\xlongleftarrow': r'\overset{#1}{\longleftarrow}',
    r'\xlongrightarrow': r'\overset{#1}{\longrightarrow}',
    r'\xlongleftrightarrow': r'\overset{#1}{\longleftrightarrow}',
    r'\xLongleftarrow': r'\overset{#1}{\Longleftarrow}',
    r'\xLongrightarrow': r'\overset{#1}{\Longrightarrow}',
    r'\xLongleftrightarrow': r'\overset{#1}{\Longleftrightarrow}',
    r'\xlongmapsto': r'\overset{#1}{\longmapsto}',
    r'\stackrel': r'\overset{#1}{#2}',
    r'\substack': r'{#1}',
}

# Shown on /preview/question
SAMPLE_QUESTION = {
    'stem': (
        r'Let $f(x) = \frac{x^2 - 1}{x - 1}$ for $x \neq 1$. '
        r'Find $\lim_{x \to 1} f(x)$.'
    ),
    'options': [
        {'text': r'$0$', 'is_correct': False, 'order': 0},
        {'text': r'$1$', 'is_correct': False, 'order': 1},
        {'text': r'$2$', 'is_correct': True, 'order': 2},
        {'text': 'Does not exist', 'is_correct': False, 'order': 3},
    ],
    'explanation': (
        r'Factorise the numerator:\n'
        r'$$\frac{x^2 - 1}{x - 1} = x + 1$$\n'
        r'so the limit is $1 + 1 = 2$.'
    ),
    'tip_formula': r'\begin{center}$a^2 - b^2 = (a - b)(a + b)$\end{center}',
}
