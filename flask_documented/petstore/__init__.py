from flask import Flask
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv
from typing import Optional, Dict, Any
import os

from flask_documented.openapi_builder import api_document, serve_openapi
from .store import PetStore

load_dotenv()


def create_app(config: Optional[Dict[str, Any]] = None):
    app = Flask(__name__)

    app.config['API_TITLE'] = os.getenv('API_TITLE', 'Flask petstore')
    app.config['API_VERSION'] = os.getenv('API_VERSION', '0.1.0')

    if config:
        # allow tests or callers to override default config values
        app.config.update(config)

    app.extensions['petstore'] = PetStore()

    from .routes import pets_bp, test_bp
    app.register_blueprint(pets_bp)
    app.register_blueprint(test_bp)

    @app.route('/healthz')
    def health():
        return {'status': 'ok'}

    # Unified error handler producing standardized JSON shape
    @app.errorhandler(Exception)
    def handle_errors(e):  # type: ignore
        if isinstance(e, HTTPException):
            payload = {
                'error': {
                    'status': e.code,
                    'title': e.name,
                    'detail': e.description,
                }
            }
            return payload, e.code
        app.logger.exception('Unhandled exception')
        return {
            'error': {
                'status': 500,
                'title': 'Internal Server Error',
                'detail': 'Unexpected error'
            }
        }, 500

    # must run after every route above is registered
    document = api_document(
        app.config['API_TITLE'],
        version=app.config['API_VERSION'],
        description='Test API on petstore',
        tags=[{'name': 'pet', 'description': 'Everything about your pets'}],
    )
    serve_openapi(app, document)

    return app


__all__ = ['create_app']
