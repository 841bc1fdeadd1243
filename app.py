"""JEE Prep — Flask application entry point."""
import logging
import logging.handlers
import traceback

from flask import Flask, redirect, url_for, request as flask_request
from werkzeug.exceptions import HTTPException

from config import settings
from routes.preview import preview_bp
from services.content_pipeline import render_content
from services.content_display import (content_display, question_stem,
                                      question_explanation, question_tips,
                                      question_option)

# --- File logging with daily rotation, 3-day retention ---
file_handler = logging.handlers.TimedRotatingFileHandler(
    settings.LOG_FILE, when='midnight', backupCount=3, encoding='utf-8',
    delay=True,
)
file_handler.setLevel(logging.DEBUG)
file_handler.setFormatter(logging.Formatter(
    '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
))

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    handlers=[logging.StreamHandler(), file_handler],
)

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'SAMEORIGIN',
    'Content-Security-Policy': (
        "default-src 'self'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data:"
    ),
}


def create_app():
    app = Flask(__name__)
    app.secret_key = settings.SECRET_KEY

    app.register_blueprint(preview_bp, url_prefix='/preview')

    @app.route('/')
    def index():
        return redirect(url_for('preview.editor'))

    app.add_template_filter(render_content, 'render_content')
    app.jinja_env.globals.update(
        content_display=content_display,
        question_stem=question_stem,
        question_explanation=question_explanation,
        question_tips=question_tips,
        question_option=question_option,
    )

    # --- Request/response logging ---
    req_logger = logging.getLogger('jeeprep.requests')

    @app.before_request
    def log_request():
        req_logger.info('>>> %s %s', flask_request.method,
                        flask_request.full_path.rstrip('?'))

    @app.after_request
    def add_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        req_logger.info('<<< %s %s  status=%d  location=%s',
                        flask_request.method,
                        flask_request.full_path.rstrip('?'),
                        response.status_code,
                        response.headers.get('Location', '-'))
        return response

    @app.errorhandler(Exception)
    def log_error(error):
        if isinstance(error, HTTPException):
            return error
        req_logger.error('!!! %s %s  EXCEPTION:\n%s',
                         flask_request.method,
                         flask_request.full_path.rstrip('?'),
                         traceback.format_exc())
        return 'Internal Server Error', 500

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True, host='0.0.0.0', port=5002, threaded=True)
