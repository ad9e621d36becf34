class PaymentError(Exception):
    """Base error for the payment adapter."""


class PaymentNotConfiguredError(PaymentError):
    """STRIPE_SECRET is not set."""


class PaymentProviderError(PaymentError):
    """Stripe API call failed (network, invalid request, auth)."""


class WebhookNotConfiguredError(PaymentError):
    """Webhook signing secret (or Stripe itself) is not configured."""


class WebhookSignatureError(PaymentError):
    """Stripe-Signature header missing or does not match the payload."""
