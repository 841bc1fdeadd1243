"""Repair common malformed or unsupported macros before typesetting.

Two static tables from config.settings drive this:
MACRO_REPAIRS renames whole control words (\\farc -> \\frac, \\R -> \\mathbb{R}),
MATH_MACROS expands argument macros (\\xrightarrow{a} -> \\overset{a}{\\rightarrow}).
"""
import re

from config.settings import MACRO_REPAIRS, MATH_MACROS

PARAM_RE = re.compile(r'#(\d)')


def _control_word_re(names):
    # Longest first so \fracc wins over \frac-like prefixes
    alternatives = '|'.join(re.escape(n) for n in sorted(names, key=len, reverse=True))
    return re.compile(r'(?:' + alternatives + r')(?![A-Za-z])')


def repair_macros(latex, repairs=None, macros=None):
    """Return latex with renames applied and argument macros expanded."""
    if not latex or '\\' not in latex:
        return latex
    repairs = MACRO_REPAIRS if repairs is None else repairs
    macros = MATH_MACROS if macros is None else macros
    if repairs:
        pattern = _control_word_re(repairs)
        latex = pattern.sub(lambda m: repairs[m.group(0)], latex)
    if macros:
        latex = expand_macros(latex, macros)
    return latex


def expand_macros(latex, macros):
    """Expand each `\\name{a}{b}` whose template uses #1, #2 ..."""
    pattern = _control_word_re(macros)
    out = []
    pos = 0
    while True:
        m = pattern.search(latex, pos)
        if not m:
            break
        template = macros[m.group(0)]
        arity = max((int(p) for p in PARAM_RE.findall(template)), default=0)
        idx = m.end()
        # Optional [below] argument of extensible arrows is dropped
        if latex[idx:idx + 1] == '[':
            close = latex.find(']', idx)
            if close != -1:
                idx = close + 1
        args = []
        for _ in range(arity):
            arg, idx = _read_group(latex, idx)
            if arg is None:
                break
            args.append(expand_macros(arg, macros))
        if len(args) < arity:
            # Not enough arguments: leave the macro for the typesetter to report
            out.append(latex[pos:m.end()])
            pos = m.end()
            continue
        expanded = PARAM_RE.sub(lambda p: args[int(p.group(1)) - 1], template)
        out.append(latex[pos:m.start()])
        out.append(expanded)
        pos = idx
    out.append(latex[pos:])
    return ''.join(out)


def _read_group(latex, idx):
    """Read one `{...}` group (or a single token) starting at idx.

    Returns (content, next_index) or (None, idx) when braces are unbalanced.
    """
    n = len(latex)
    while idx < n and latex[idx].isspace():
        idx += 1
    if idx >= n:
        return None, idx
    if latex[idx] != '{':
        if latex[idx] == '\\':
            m = re.match(r'\\(?:[A-Za-z]+|.)?', latex[idx:])
            return m.group(0), idx + len(m.group(0))
        return latex[idx], idx + 1
    depth = 0
    for j in range(idx, n):
        ch = latex[j]
        if ch == '\\':
            continue
        if ch == '{' and (j == 0 or latex[j - 1] != '\\'):
            depth += 1
        elif ch == '}' and latex[j - 1] != '\\':
            depth -= 1
            if depth == 0:
                return latex[idx + 1:j], j + 1
    return None, idx
