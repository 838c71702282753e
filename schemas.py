# schemas.py

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


# -----------------------------
# Inbound (Dialogflow fulfillment request)
# -----------------------------
class Intent(BaseModel):
    displayName: Optional[str] = None

    model_config = {"extra": "ignore"}


class QueryResult(BaseModel):
    intent: Optional[Intent] = None
    parameters: Optional[Dict[str, Any]] = None

    model_config = {"extra": "ignore"}


class WebhookRequest(BaseModel):
    """Every field is optional; absence means empty intent / no parameters."""
    queryResult: Optional[QueryResult] = None

    model_config = {"extra": "ignore"}

    @property
    def intent_name(self) -> str:
        qr = self.queryResult
        if qr is None or qr.intent is None:
            return ""
        return qr.intent.displayName or ""

    @property
    def parameters(self) -> Dict[str, Any]:
        qr = self.queryResult
        if qr is None:
            return {}
        return dict(qr.parameters or {})


# -----------------------------
# Outbound
# -----------------------------
class FulfillmentResponse(BaseModel):
    fulfillmentText: str = Field(default="")
