"""
FastAPI dependencies: per-app collaborators live on app.state (see create_app).
"""
from fastapi import Request

from storefront.grants import AccessGate, GrantIssuer
from storefront.services.payments.service import PaymentService


def get_grant_issuer(request: Request) -> GrantIssuer:
    return request.app.state.grant_issuer


def get_access_gate(request: Request) -> AccessGate:
    return request.app.state.access_gate


def get_payment_service(request: Request) -> PaymentService:
    return request.app.state.payment_service
