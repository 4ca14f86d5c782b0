"""Flask entrypoint for the TubeScan analysis service."""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from web.config import AppConfig
from web.db import init_db
from web.routes.api import api_bp



def create_app() -> Flask:
    app = Flask(__name__)

    config = AppConfig.from_env()
    app.config.update(config.to_flask_config())

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    init_db(app)

    app.register_blueprint(api_bp)

    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException):
        return jsonify({"message": exc.description}), exc.code

    app.wsgi_app = ProxyFix(app.wsgi_app, x_proto=1, x_host=1)
    return app


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=8080, debug=app.config.get("APP_ENV") != "production")
