"""Inbound webhooks from the identity and billing provider."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from opstracker.api.schemas import WebhookAck
from opstracker.api.dependencies import get_database
from opstracker.config import CONFIG
from opstracker.db import DatabaseClient
from opstracker.logger import log
from opstracker.webhooks import handle_billing_event, handle_clerk_event, verify_webhook

router = APIRouter()


@router.post("/webhooks/clerk", response_model=WebhookAck)
async def clerk_webhook(request: Request, db: DatabaseClient = Depends(get_database)) -> WebhookAck:
    payload = await request.body()
    event = verify_webhook(payload, request.headers, CONFIG.clerk_webhook_secret)
    result = handle_clerk_event(db, event)
    log("Identity webhook handled", **result)
    return WebhookAck(**result)


@router.post("/webhooks/clerk-billing", response_model=WebhookAck)
async def clerk_billing_webhook(request: Request, db: DatabaseClient = Depends(get_database)) -> WebhookAck:
    payload = await request.body()
    event = verify_webhook(payload, request.headers, CONFIG.clerk_billing_webhook_secret)
    result = handle_billing_event(db, event)
    log("Billing webhook handled", **result)
    return WebhookAck(**result)
