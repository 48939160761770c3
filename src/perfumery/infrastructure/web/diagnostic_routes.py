"""Operator diagnostics: payload inspection and the SMTP smoke test."""

from __future__ import annotations

from typing import Any

import structlog
from fastapi import APIRouter, Body, Depends

from perfumery.application.order_validation import inspect_order_payload
from perfumery.application.send_test_email import SendTestEmailHandler
from perfumery.infrastructure.bootstrap import Container
from perfumery.infrastructure.web.dependencies import get_container, require_admin
from perfumery.infrastructure.web.schemas import EmailTestRequest

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["diagnostics"])


@router.post("/debug-order")
def debug_order(payload: Any = Body(default=None)) -> dict:
    inspection = inspect_order_payload(payload)
    logger.info("debug_order_received", issues=inspection.issues)
    return {
        "received": True,
        "dataStructure": inspection.data_structure,
        "issues": inspection.issues,
        "valid": inspection.valid,
    }


@router.post("/test-email", dependencies=[Depends(require_admin)])
def test_email(
    body: EmailTestRequest | None = None,
    container: Container = Depends(get_container),
) -> dict:
    handler = SendTestEmailHandler(email_channel=container.email_channel, composer=container.composer)
    handler.handle(body.email if body else None)
    return {"success": True, "message": "Test email sent successfully!"}
