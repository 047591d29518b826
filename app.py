import atexit
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, NotFound

from src.infrastructure.config import settings
from src.infrastructure.database import MongoConnectionManager, init_app as init_db
from src.domain.errors import StoreConnectionError
from quiz_utils.logger_utils import get_logger, logger

# Import Blueprints
from src.api.routes_quiz import quiz_bp


def create_app(connection: Optional[MongoConnectionManager] = None):
    """
    Application factory for Flask.

    Without an injected connection a MongoConnectionManager is built and
    connected here; a failed connection aborts startup.
    """
    app = Flask(__name__)
    get_logger(log_level=settings.LOG_LEVEL)

    # --- Core Configuration ---
    app.config['ENV_NAME'] = settings.FLASK_ENV
    CORS(app, resources={r"/front-end-quiz/*": {"origins": "*"}})

    # --- Database ---
    if connection is None:
        connection = MongoConnectionManager(settings)
        connection.connect()
        atexit.register(connection.disconnect)
    init_db(app, connection, settings)

    # --- Blueprints Registration ---
    app.register_blueprint(quiz_bp, url_prefix='/front-end-quiz')

    # --- Health Checks ---
    @app.route('/health')
    def health_check():
        return jsonify({"status": "healthy"}), 200

    @app.route('/health/detailed')
    def detailed_health_check():
        health_status = {"status": "healthy", "components": {}}
        try:
            connection.ping()
            health_status["components"]["mongodb"] = {"status": "healthy"}
        except StoreConnectionError as e:
            health_status["components"]["mongodb"] = {"status": "unhealthy", "error": str(e)}
            health_status["status"] = "unhealthy"
        return jsonify(health_status), 503 if health_status["status"] == "unhealthy" else 200

    # --- Error Handling ---
    @app.errorhandler(NotFound)
    def handle_not_found(error):
        logger.warning(f"Not Found error for path: {request.path}")
        return jsonify({"error": "Not Found"}), 404

    @app.errorhandler(Exception)
    def handle_exception(error):
        if isinstance(error, HTTPException):
            # 405 and friends keep their own status
            logger.warning(f"{error.code} {error.name} for path: {request.path}")
            return jsonify({"error": error.name}), error.code
        logger.error(f"Unhandled exception for path {request.path}: {error}", exc_info=True)
        return jsonify({"error": "Internal Server Error"}), 500

    logger.info(f"Flask App created successfully in {settings.FLASK_ENV} mode.")
    return app


if __name__ == '__main__':
    with MongoConnectionManager(settings) as mongo:
        app = create_app(mongo)
        app.run(host='0.0.0.0', port=settings.PORT)
