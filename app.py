# app.py — Task webhook (Dialogflow fulfillment)

import atexit
from datetime import datetime as _dt
from typing import Optional

from flask import Flask, request, jsonify
from flask_cors import CORS
from pydantic import ValidationError

from config import Settings, configure_logging
from database import TaskGateway
from handlers.tasks import SERVER_ERROR_TEXT, TaskIntentDispatcher
from schemas import FulfillmentResponse, WebhookRequest


def _reply(text: str):
    """Every webhook answer is 200 with a single fulfillmentText field."""
    return jsonify(FulfillmentResponse(fulfillmentText=text).model_dump()), 200


def create_app(
    settings: Optional[Settings] = None,
    gateway: Optional[TaskGateway] = None,
    dispatcher: Optional[TaskIntentDispatcher] = None,
) -> Flask:
    """
    Build the Flask app. Passing a gateway (or a whole dispatcher) skips
    engine creation, which is how the tests run against SQLite or a fake.
    """
    settings = settings or Settings.from_env()

    if dispatcher is None:
        if gateway is None:
            gateway = TaskGateway.from_settings(settings)
            atexit.register(gateway.close)
        if settings.create_schema:
            gateway.init_schema()
        dispatcher = TaskIntentDispatcher(gateway, user_id=settings.user_id)

    app = Flask(__name__)
    CORS(app)

    @app.get('/health')
    def health():
        return jsonify({'ok': True, 'service': 'task-webhook', 'time': _dt.now().isoformat()})

    # Tiny root route for manual pings
    @app.get('/')
    def root():
        return jsonify({'status': 'running'})

    @app.route('/webhook', methods=['POST'])
    def webhook():
        data = request.get_json(silent=True)
        try:
            payload = WebhookRequest.model_validate(data if isinstance(data, dict) else {})
        except ValidationError as e:
            app.logger.warning("Malformed webhook body, treating as empty: %s", e)
            payload = WebhookRequest()

        try:
            result = dispatcher.handle(payload.intent_name, payload.parameters)
        except Exception:
            app.logger.exception("Webhook error")
            return _reply(SERVER_ERROR_TEXT)

        app.logger.info("intent=%r outcome=%s", payload.intent_name, result.outcome.value)
        return _reply(result.text)

    return app


if __name__ == '__main__':
    _settings = Settings.from_env()
    configure_logging(_settings.log_level)
    create_app(_settings).run(host="0.0.0.0", port=4321)
