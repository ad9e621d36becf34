"""
Prometheus-based metrics for production monitoring.
Provides /metrics endpoint for scraping.
"""
from prometheus_client import Counter, generate_latest, CONTENT_TYPE_LATEST
from fastapi import APIRouter, Response


grants_issued_total = Counter(
    "grants_issued_total",
    "Total number of access grants issued",
    ["source"],  # demo, verify, webhook
)

checkout_sessions_total = Counter(
    "checkout_sessions_total",
    "Checkout session creation attempts",
    ["status"],  # created, not_configured, provider_error
)

session_verifications_total = Counter(
    "session_verifications_total",
    "Checkout session verifications by outcome",
    ["outcome"],
)

webhook_events_total = Counter(
    "webhook_events_total",
    "Verified webhook events received",
    ["event_type"],
)

webhook_rejected_total = Counter(
    "webhook_rejected_total",
    "Webhook requests rejected before processing",
    ["reason"],  # not_configured, signature
)

protected_downloads_total = Counter(
    "protected_downloads_total",
    "Protected file requests",
    ["result"],  # served, unauthorized
)


router = APIRouter()


@router.get("/metrics")
def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint for scraping."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
