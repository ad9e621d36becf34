"""
PaymentService — оплата через Stripe Checkout и подтверждение платежа.

Ответственности:
- Создание checkout session (редирект на hosted checkout)
- Синхронная проверка session (клиент опрашивает после редиректа)
- Приём webhook checkout.session.completed с проверкой подписи
Во всех случаях подтверждённая оплата превращается в grant через GrantIssuer.

Секретный ключ передаётся в каждый вызов (api_key=), глобальный stripe.api_key не трогаем.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import stripe
from pydantic import BaseModel

from storefront.core.config import Settings
from storefront.grants.issuer import BUYER_IDENTITY, GrantIssuer
from storefront.services.payments.errors import (
    PaymentNotConfiguredError,
    PaymentProviderError,
    WebhookNotConfiguredError,
    WebhookSignatureError,
)
from storefront.utils.metrics import (
    checkout_sessions_total,
    session_verifications_total,
    webhook_events_total,
    webhook_rejected_total,
)

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"


class VerificationOutcome(str, Enum):
    PAID = "paid"
    NOT_PAID = "not_paid"
    NOT_CONFIGURED = "not_configured"
    MISSING_SESSION = "missing_session"
    PROVIDER_ERROR = "provider_error"


class VerificationResult(BaseModel):
    """Наружу уходят только ok/token; outcome — для логов и метрик."""

    ok: bool
    token: str | None = None
    outcome: VerificationOutcome

    model_config = {"frozen": True}


class WebhookResult(BaseModel):
    event_type: str
    token: str | None = None

    model_config = {"frozen": True}


def customer_email(session: Any) -> str | None:
    """customer_details.email из Checkout Session, если есть."""
    details = getattr(session, "customer_details", None)
    if details is None:
        return None
    return getattr(details, "email", None)


class PaymentService:
    def __init__(self, settings: Settings, issuer: GrantIssuer):
        self.settings = settings
        self.issuer = issuer

    @property
    def is_configured(self) -> bool:
        return self.settings.stripe_configured

    # ------------------------------------------------------------------
    # Checkout
    # ------------------------------------------------------------------

    def create_checkout_session(self) -> str:
        """Создать Checkout Session на один товар. Возвращает URL hosted checkout."""
        if not self.is_configured:
            checkout_sessions_total.labels(status="not_configured").inc()
            raise PaymentNotConfiguredError("Stripe not configured.")

        try:
            session = stripe.checkout.Session.create(
                api_key=self.settings.stripe_secret,
                mode="payment",
                payment_method_types=["card"],
                line_items=[{"price": self.settings.stripe_price_id, "quantity": 1}],
                success_url=self.settings.success_url,
                cancel_url=self.settings.cancel_url,
            )
        except stripe.StripeError as e:
            checkout_sessions_total.labels(status="provider_error").inc()
            logger.exception("checkout_session_failed", extra={"error": str(e)})
            raise PaymentProviderError(str(e)) from e

        checkout_sessions_total.labels(status="created").inc()
        logger.info("checkout_session_created", extra={"session_id": session.id})
        return session.url

    # ------------------------------------------------------------------
    # Synchronous verification (polled by the client)
    # ------------------------------------------------------------------

    def verify_session(self, session_id: str | None) -> VerificationResult:
        """
        Проверить оплату session. Никогда не бросает на ошибках Stripe:
        endpoint опрашивается клиентом, ошибка = {ok: false}.
        """
        if not self.is_configured:
            return self._verification(VerificationOutcome.NOT_CONFIGURED, session_id)
        if not session_id:
            return self._verification(VerificationOutcome.MISSING_SESSION, session_id)

        try:
            session = stripe.checkout.Session.retrieve(
                session_id, api_key=self.settings.stripe_secret
            )
        except stripe.StripeError as e:
            logger.warning(
                "verify_session_provider_error",
                extra={"session_id": session_id, "error": str(e)},
            )
            return self._verification(VerificationOutcome.PROVIDER_ERROR, session_id)

        if getattr(session, "payment_status", None) != "paid":
            return self._verification(VerificationOutcome.NOT_PAID, session_id)

        token = self.issuer.issue(customer_email(session), fallback_identity=BUYER_IDENTITY, source="verify")
        return self._verification(VerificationOutcome.PAID, session_id, token)

    def _verification(
        self,
        outcome: VerificationOutcome,
        session_id: str | None,
        token: str | None = None,
    ) -> VerificationResult:
        session_verifications_total.labels(outcome=outcome.value).inc()
        logger.info("verify_session", extra={"session_id": session_id, "outcome": outcome.value})
        return VerificationResult(ok=token is not None, token=token, outcome=outcome)

    # ------------------------------------------------------------------
    # Webhook
    # ------------------------------------------------------------------

    def handle_webhook(self, payload: bytes, signature: str | None) -> WebhookResult:
        """
        Проверка подписи до любого разбора payload. При ошибке подписи grant не выдаётся.
        Неизвестные типы событий подтверждаются и игнорируются, чтобы Stripe не ретраил.
        """
        secret = self.settings.stripe_webhook_secret
        if not secret or not self.is_configured:
            webhook_rejected_total.labels(reason="not_configured").inc()
            raise WebhookNotConfiguredError("webhook not configured")
        if not signature:
            webhook_rejected_total.labels(reason="signature").inc()
            raise WebhookSignatureError("No Stripe-Signature header")

        try:
            event = stripe.Webhook.construct_event(payload, signature, secret)
        except (ValueError, stripe.SignatureVerificationError) as e:
            webhook_rejected_total.labels(reason="signature").inc()
            logger.warning("webhook_signature_invalid", extra={"error": str(e)})
            raise WebhookSignatureError(str(e)) from e

        event_type = event.type
        webhook_events_total.labels(event_type=event_type).inc()
        logger.info("webhook_received", extra={"event_type": event_type, "event_id": getattr(event, "id", None)})

        if event_type != CHECKOUT_COMPLETED:
            return WebhookResult(event_type=event_type)

        session = event.data.object
        token = self.issuer.issue(customer_email(session), fallback_identity=BUYER_IDENTITY, source="webhook")
        return WebhookResult(event_type=event_type, token=token)
