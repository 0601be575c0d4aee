import logging

from flask import Flask, jsonify, request
from flask_cors import CORS

from .config import load_settings
from .dispatcher import ActionDispatcher
from .errors import InvalidHistoryError
from .gemini import GeminiClient
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings=None, client=None):
    """Build the Flask app. Tests pass their own settings and a fake client."""
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY not found in environment variables.")

    if client is None:
        client = GeminiClient(settings)
    dispatcher = ActionDispatcher(client)

    app = Flask(__name__)
    CORS(app)
    app.url_map.strict_slashes = False
    app.config["SETTINGS"] = settings
    app.extensions["career_dispatcher"] = dispatcher

    def run_action(action, fields, history, result_key):
        try:
            response = dispatcher.handle(action, fields, history)
        except InvalidHistoryError as e:
            logger.warning("Rejected conversation history: %s", e)
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.exception("Error handling action %r", action)
            return jsonify({"error": "Internal server error.", "details": str(e)}), 500

        if result_key != "result":
            response[result_key] = response.pop("result")
        return jsonify(response), 200

    def read_body():
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else None

    # ==========================================
    # ROUTES
    # ==========================================
    @app.route('/api/action', methods=['POST'])
    def action_route():
        data = read_body()
        if data is None:
            return jsonify({"error": "Request body must be a JSON object."}), 400
        return run_action(data.get('action'), data.get('fields'), data.get('history'), "result")

    @app.route('/botao', methods=['POST'])
    def legacy_action_route():
        """Request shape of the original frontend: {acao, dados, chatHistory}."""
        data = read_body()
        if data is None:
            return jsonify({"error": "Request body must be a JSON object."}), 400
        return run_action(data.get('acao'), data.get('dados'), data.get('chatHistory'), "resposta")

    @app.route('/api/health', methods=['GET'])
    def health():
        return jsonify({
            "status": "alive",
            "model": settings.gemini_model,
            "env_check": {
                "gemini_api_key": "present" if settings.gemini_api_key else "missing"
            }
        })

    return app
