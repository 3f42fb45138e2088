from datetime import datetime, timezone

import structlog
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

import weather_service as weather_service
from config import Config
from errors import GatewayError
from logging_config import configure_logging

log = structlog.get_logger(__name__)


# App factory — takes the startup configuration, enables CORS, and registers routes and error handlers.
def create_app(config: Config | None = None):
    config = config or Config.from_env()

    app = Flask(__name__)
    app.json.ensure_ascii = False
    CORS(app, send_wildcard=True)

    if config.proxy_url:
        log.info("proxy_enabled", proxy=config.proxy_url)
    else:
        log.info("proxy_disabled")

    @app.route("/", methods=["GET"])
    def index():
        return jsonify({
            "message": "Welcome to the CWA weather forecast API",
            "endpoints": {
                "weather_36hr": {
                    "url": "/api/weather_36hr/:city",
                    "description": "Today/tomorrow 36-hour forecast for a city or county",
                    "example": "/api/weather_36hr/臺北市",
                },
                "weather_hazards": {
                    "url": "/api/weather_hazards/:city",
                    "description": "Weather warnings and advisories for a city or county",
                    "example": "/api/weather_hazards/高雄市",
                },
                "health": "/api/health",
            },
        })

    @app.route("/api/health", methods=["GET"])
    def health():
        stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return jsonify({"status": "OK", "timestamp": stamp})

    # A missing city still reaches the handler so it can answer 400.
    @app.route("/api/weather_36hr/", defaults={"city": ""}, methods=["GET"], strict_slashes=False)
    @app.route("/api/weather_36hr/<city>", methods=["GET"])
    def weather_36hr(city):
        data = weather_service.get_weather_36hr(city, config)
        return jsonify({"success": True, "data": data})

    @app.route("/api/weather_hazards/", defaults={"city": ""}, methods=["GET"], strict_slashes=False)
    @app.route("/api/weather_hazards/<city>", methods=["GET"])
    def weather_hazards(city):
        data = weather_service.get_weather_hazards(city, config)
        return jsonify({"success": True, "data": data})

    # Converts every gateway failure into its error envelope.
    @app.errorhandler(GatewayError)
    def handle_gateway_error(e):
        log.warning("request_failed", error=e.error, status=e.status_code, message=e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"error": "Route not found"}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"error": e.name, "message": e.description}), e.code

    # Last resort for defects nothing else caught.
    @app.errorhandler(Exception)
    def handle_unexpected(e):
        log.exception("unhandled_error")
        return jsonify({"error": "Server error", "message": str(e)}), 500

    return app

if __name__ == "__main__":
    config = Config.from_env()
    configure_logging(config.log_level, json=config.log_json)
    app = create_app(config)
    log.info("server_started", port=config.port, env=config.env)
    app.run(host="0.0.0.0", port=config.port, debug=config.env == "development")
