# app.py - application factory for the guess-the-flag game
import logging
import random
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, flash, redirect, render_template, request, url_for
from flask_session import Session
from flask_wtf import CSRFProtect
from flask_wtf.csrf import CSRFError, generate_csrf

from config import Config
from services.flag_assets import flag_filename

# Import blueprints
from routes.game_routes import game_bp
from routes.main_routes import main_bp


def create_app(test_config: dict | None = None):
    # Load environment variables from .env when running via python wsgi.py
    load_dotenv()
    app = Flask(__name__, static_folder="static", template_folder="templates",
                instance_path=Config.INSTANCE_PATH)
    app.config.from_object(Config)

    # Allow overriding config for testing
    if test_config:
        app.config.update(test_config)
        # Disable CSRF in tests to simplify form posting
        if app.config.get('TESTING'):
            app.config.setdefault('WTF_CSRF_ENABLED', False)

    # Initialize extensions
    if app.config.get('SESSION_TYPE') == 'filesystem':
        Path(app.config['SESSION_FILE_DIR']).mkdir(parents=True, exist_ok=True)
    Session(app)
    CSRFProtect(app)

    # One random source per app; a configured seed makes games reproducible
    app.extensions['game_rng'] = random.Random(app.config.get('GAME_RANDOM_SEED'))

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(game_bp)

    # Inject csrf_token() helper for templates without FlaskForm
    @app.context_processor
    def inject_csrf_token():
        return dict(csrf_token=generate_csrf)

    @app.template_filter('flag_url')
    def flag_url_filter(country):
        """Static URL of the flag image for a country name."""
        return url_for('static', filename=flag_filename(country))

    # Error handlers
    @app.errorhandler(404)
    def not_found(e):
        return render_template("404.html"), 404

    @app.errorhandler(500)
    def internal_error(e):
        app.logger.exception("Unhandled server error")
        return render_template("500.html"), 500

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        flash('Your session expired or the form is invalid. Please try again.', 'error')
        return redirect(url_for('main.index'))

    # Health check endpoint for uptime monitoring
    @app.route('/healthz', methods=['GET'])
    def healthz():
        return {"status": "ok"}, 200

    # Basic security headers & proxy fix
    @app.after_request
    def set_security_headers(resp):
        resp.headers.setdefault('X-Frame-Options', 'DENY')
        resp.headers.setdefault('X-Content-Type-Options', 'nosniff')
        resp.headers.setdefault('Referrer-Policy', 'strict-origin-when-cross-origin')
        resp.headers.setdefault('Permissions-Policy', 'geolocation=(), microphone=(), camera=()')
        resp.headers.setdefault('Content-Security-Policy', "default-src 'self'; style-src 'self' https://cdn.jsdelivr.net 'unsafe-inline'; img-src 'self' data:;")
        return resp

    # Respect X-Forwarded-Proto for HTTPS redirects behind a proxy
    @app.before_request
    def _detect_proxy_scheme():
        xf_proto = request.headers.get('X-Forwarded-Proto')
        if xf_proto:
            request.environ['wsgi.url_scheme'] = xf_proto

    # Basic logging configuration with LOG_LEVEL override
    log_level_name = app.config.get('LOG_LEVEL', 'INFO')
    level = getattr(logging, log_level_name, logging.INFO)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s %(message)s')
    app.logger.info("startup log_level=%s session_type=%s seeded=%s", log_level_name,
                    app.config.get('SESSION_TYPE'), app.config.get('GAME_RANDOM_SEED') is not None)

    return app

"""Application factory only module.

Production: use `gunicorn wsgi:app` (see wsgi.py).
Local dev: `python wsgi.py` or `flask --app wsgi run`.
Tests: import create_app and instantiate explicitly; no server starts on import.
"""
