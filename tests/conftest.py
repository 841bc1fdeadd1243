"""Shared test fixtures — Flask app/client and a fresh typesetting cache."""
import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def clear_render_cache():
    """Each test starts with an empty latex_to_svg cache."""
    from services.math_renderer import latex_to_svg
    latex_to_svg.cache_clear()
    yield
    latex_to_svg.cache_clear()


@pytest.fixture
def app(tmp_path, monkeypatch):
    """Flask test app."""
    monkeypatch.setattr('config.settings.LOG_FILE', str(tmp_path / 'test.log'))
    from app import create_app
    application = create_app()
    application.config['TESTING'] = True
    return application


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
