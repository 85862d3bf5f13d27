"""
Flask application factory.

Creates and configures the Flask app, builds the per-app components and
registers all blueprints.
"""
from flask import Flask, request


CONFIG_KEYS = (
    'LOG_LEVEL',
    'LOG_FORMAT',
    'DATA_DIR',
    'DB_FILE',
    'MAX_BODY_BYTES',
    'ADVISOR_API_KEY',
    'AUTH_TOKEN_TTL_SECONDS',
    'ADVISOR_USERS',
    'RATE_LIMITS',
    'RECENT_LEADS_LIMIT',
    'AUDIT_DEFAULT_LIMIT',
    'AUDIT_MAX_LIMIT',
    'CRM_WEBHOOK_URL',
    'CRM_API_KEY',
    'CRM_TIMEOUT_SECONDS',
)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET,POST,PATCH,OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type, Authorization, x-advisor-key',
}


def create_app(test_config=None):
    """Create and configure the Flask application."""
    from leaddesk import config
    from leaddesk.errors import register_error_handlers
    from leaddesk.extensions import init_components
    from leaddesk.logging_config import configure_logging

    app = Flask(__name__)

    for key in CONFIG_KEYS:
        app.config[key] = getattr(config, key)
    if test_config:
        app.config.update(test_config)
    app.config['MAX_CONTENT_LENGTH'] = app.config['MAX_BODY_BYTES']

    # Keep insertion order (status order, totals layout) in JSON bodies
    app.json.sort_keys = False

    configure_logging(app)
    register_error_handlers(app)
    init_components(app)

    @app.before_request
    def answer_preflight():
        if request.method == 'OPTIONS':
            return '', 204, CORS_HEADERS

    @app.after_request
    def no_store(response):
        if response.mimetype == 'application/json':
            response.headers['Cache-Control'] = 'no-store'
        return response

    # Register blueprints
    from leaddesk.routes.auth import bp as auth_bp
    from leaddesk.routes.leads import bp as leads_bp
    from leaddesk.routes.dashboard import bp as dashboard_bp
    from leaddesk.routes.advisor import bp as advisor_bp
    from leaddesk.routes.telemetry import bp as telemetry_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(leads_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(advisor_bp)
    app.register_blueprint(telemetry_bp)

    return app
