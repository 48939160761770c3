"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import partial
from pathlib import Path

from perfumery.application.notifications.channels import EmailChannel, SmsChannel
from perfumery.application.notifications.dispatcher import NotificationDispatcher
from perfumery.application.notifications.templates import MessageComposer, StoreProfile
from perfumery.domain.repository.order_repository import OrderRepository
from perfumery.domain.repository.product_repository import ProductRepository
from perfumery.infrastructure.config import Settings
from perfumery.infrastructure.notifications.sms_channels import (
    HttpSmsChannel,
    LoggingSmsChannel,
)
from perfumery.infrastructure.notifications.smtp_email_channel import SmtpEmailChannel
from perfumery.infrastructure.persistence import mongo
from perfumery.infrastructure.persistence.fallback_product_repository import (
    FallbackProductRepository,
)
from perfumery.infrastructure.persistence.mongo_order_repository import (
    MongoOrderRepository,
)
from perfumery.infrastructure.persistence.mongo_product_repository import (
    MongoProductRepository,
)
from perfumery.infrastructure.persistence.switching_product_repository import (
    SwitchingProductRepository,
)
from perfumery.infrastructure.uploads import ImageStore


@dataclass
class Container:
    """Everything the HTTP app and the CLI need, built once per process."""

    settings: Settings
    order_repo: OrderRepository
    product_repo: ProductRepository
    email_channel: EmailChannel
    sms_channel: SmsChannel
    composer: MessageComposer
    dispatcher: NotificationDispatcher
    image_store: ImageStore


def build_container(settings: Settings | None = None) -> Container:
    settings = settings or Settings()

    client = mongo.connect(settings)
    db = mongo.database(client, settings)
    product_repo = SwitchingProductRepository(
        live=MongoProductRepository(db["products"]),
        fallback=FallbackProductRepository(),
        probe=partial(mongo.is_available, client),
    )

    composer = MessageComposer(
        StoreProfile(
            name=settings.store_name,
            website=settings.store_website,
            contact_phone=settings.contact_phone,
            contact_email=settings.contact_email,
        )
    )
    email_channel = SmtpEmailChannel(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.email_user,
        password=settings.email_pass,
        sender_name=settings.store_name,
        use_ssl=settings.smtp_ssl,
        timeout=settings.notification_timeout_seconds,
    )
    sms_channel = _sms_channel(settings)

    return Container(
        settings=settings,
        order_repo=MongoOrderRepository(db["orders"]),
        product_repo=product_repo,
        email_channel=email_channel,
        sms_channel=sms_channel,
        composer=composer,
        dispatcher=NotificationDispatcher(
            email_channel=email_channel,
            sms_channel=sms_channel,
            composer=composer,
            timeout_seconds=settings.notification_timeout_seconds,
        ),
        image_store=ImageStore(Path(settings.upload_dir), settings.max_upload_bytes),
    )


def _sms_channel(settings: Settings) -> SmsChannel:
    if settings.sms_user and settings.sms_pass:
        return HttpSmsChannel(
            api_url=settings.sms_api_url,
            username=settings.sms_user,
            password=settings.sms_pass,
            sender_id=settings.sms_sender_id,
            timeout=settings.notification_timeout_seconds,
        )
    return LoggingSmsChannel()
