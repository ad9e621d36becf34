"""
Purchase routes: demo grant, Stripe checkout, session verification, Stripe webhook.
All successful paths end in GrantIssuer.issue and return the token.
"""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Header, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from storefront.api.deps import get_grant_issuer, get_payment_service
from storefront.grants import DEMO_IDENTITY, GrantIssuer
from storefront.services.payments.errors import (
    PaymentNotConfiguredError,
    PaymentProviderError,
    WebhookNotConfiguredError,
    WebhookSignatureError,
)
from storefront.services.payments.service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["purchases"])


def _as_text(value: Any) -> str | None:
    """Non-string JSON values (numbers, null, objects) count as absent."""
    return value if isinstance(value, str) else None


# Bodies are typed loosely: a wrong field type must not turn into a 422.
class DemoPurchaseRequest(BaseModel):
    email: Any = None


class VerifySessionRequest(BaseModel):
    session_id: Any = None


@router.post("/demo-purchase")
def demo_purchase(
    body: DemoPurchaseRequest | None = Body(default=None),
    issuer: GrantIssuer = Depends(get_grant_issuer),
) -> dict:
    """Issue a grant without payment."""
    email = _as_text(body.email) if body else None
    token = issuer.issue(email, fallback_identity=DEMO_IDENTITY, source="demo")
    return {"ok": True, "token": token}


@router.post("/create-checkout-session")
def create_checkout_session(payments: PaymentService = Depends(get_payment_service)):
    try:
        url = payments.create_checkout_session()
    except PaymentNotConfiguredError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e), "code": "not_configured"},
        )
    except PaymentProviderError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e), "code": "provider_error"},
        )
    return {"url": url}


@router.post("/verify-session")
def verify_session(
    body: VerifySessionRequest | None = Body(default=None),
    payments: PaymentService = Depends(get_payment_service),
) -> dict:
    """
    Polled by the storefront page after the Stripe redirect.
    Not paid and provider failure both answer {ok: false}; the difference is only in logs.
    """
    result = payments.verify_session(_as_text(body.session_id) if body else None)
    if not result.ok:
        return {"ok": False}
    return {"ok": True, "token": result.token}


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    stripe_signature: str | None = Header(default=None),
    payments: PaymentService = Depends(get_payment_service),
):
    # Signature is computed over the raw bytes, so the body must not be parsed first.
    payload = await request.body()
    try:
        payments.handle_webhook(payload, stripe_signature)
    except WebhookNotConfiguredError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_400_BAD_REQUEST)
    except WebhookSignatureError as e:
        return PlainTextResponse(f"Webhook Error: {e}", status_code=status.HTTP_400_BAD_REQUEST)
    return {"received": True}
