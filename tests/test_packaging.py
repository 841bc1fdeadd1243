"""Every third-party module imported directly is declared in pyproject.toml."""
import os
import re

import pytest

tomllib = pytest.importorskip('tomllib')

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def _declared():
    with open(os.path.join(ROOT, 'pyproject.toml'), 'rb') as f:
        deps = tomllib.load(f)['project']['dependencies']
    return {re.split(r'[<>=!~ ]', d, maxsplit=1)[0].lower() for d in deps}


def test_direct_imports_declared():
    assert {'flask', 'markupsafe', 'matplotlib', 'python-dotenv', 'werkzeug'} <= _declared()
