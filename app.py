from flask import Flask, jsonify
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException
import logging

load_dotenv()

from config import Config  # noqa: E402  (load_dotenv needs to run first)
from errors import DomainError  # noqa: E402
from extensions import db, login_manager  # noqa: E402  (load_dotenv needs to run first)

logger = logging.getLogger(__name__)


def create_app(test_config=None) -> Flask:
    """Application factory for the Energy+Advertising backend."""

    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # init extensions
    db.init_app(app)
    login_manager.init_app(app)

    # blueprints
    from modules.accounts import bp as accounts_bp
    from modules.walks import bp as walks_bp
    from modules.friends import bp as friends_bp
    from modules.ranking import bp as ranking_bp
    from modules.stores import bp as stores_bp

    app.register_blueprint(accounts_bp)
    app.register_blueprint(walks_bp)
    app.register_blueprint(friends_bp)
    app.register_blueprint(ranking_bp)
    app.register_blueprint(stores_bp)

    # --- errors as JSON ---
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        db.session.rollback()
        return jsonify(ok=False, error=error.message), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        if error.code is not None and error.code < 400:
            # routing redirects (308) keep their Location header
            return error
        db.session.rollback()
        return jsonify(ok=False, error=error.description), error.code

    @app.route("/health")
    def health():
        return jsonify(status="ok")

    # DB
    with app.app_context():
        # models must be imported before create_all()
        import models  # noqa: F401

        db.create_all()

    logger.info("app created (testing=%s)", app.config.get("TESTING", False))
    return app

if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
