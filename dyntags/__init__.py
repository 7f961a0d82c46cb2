from flask import Flask
from flask_cors import CORS
import logging
from dyntags.config import Config
from dyntags.tags.catalog import create_default_catalog


def create_app(config_class=Config, catalog=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    CORS(app,
         resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}},
         supports_credentials=False,
         allow_headers=["Content-Type", "Authorization"],
         methods=["GET", "POST", "OPTIONS"])

    # The catalog is built once per app and only read afterwards
    app.extensions['dyntags_catalog'] = catalog if catalog is not None else create_default_catalog()

    from dyntags.routes import dynamic_data
    app.register_blueprint(dynamic_data.dynamic_data_bp)

    # Health check endpoint
    from dyntags.routes import health
    app.register_blueprint(health.bp)

    return app
