"""Runtime settings, read from the environment or a ``.env`` file."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration for the storefront.

    Environment names match the deployment's existing ``.env`` file
    (``MONGODB_URI``, ``EMAIL_USER``, ``SMS_USER``, ``PORT`` ...).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    # --- Storage --------------------------------------------------------------
    mongodb_uri: str = Field(
        default="mongodb://localhost:27017/herman_perfume",
        description="MongoDB connection string",
    )
    database_name: str | None = Field(
        default=None,
        description="Database name; defaults to the one in MONGODB_URI",
    )
    mongo_timeout_ms: int = Field(
        default=2000,
        description="Server selection timeout used by the connectivity probe",
    )

    # --- Email ----------------------------------------------------------------
    email_user: str | None = Field(default=None, description="SMTP login / sender address")
    email_pass: str | None = Field(default=None, description="SMTP password")
    smtp_host: str = Field(default="smtp.gmail.com")
    smtp_port: int = Field(default=465)
    smtp_ssl: bool = Field(default=True)

    # --- SMS ------------------------------------------------------------------
    sms_user: str | None = Field(default=None)
    sms_pass: str | None = Field(default=None)
    sms_api_url: str = Field(
        default="https://sms.sslwireless.com/pushapi/dynamic/server.php",
    )
    sms_sender_id: str = Field(default="HermanPerfume")

    # --- Notifications --------------------------------------------------------
    notification_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for each notification channel",
    )
    store_name: str = Field(default="Herman Perfume")
    store_website: str = Field(default="www.hermanperfume.com")
    contact_phone: str = Field(default="+88 01XXXXXXXXX")
    contact_email: str = Field(default="support@hermanperfume.com")

    # --- Orders ---------------------------------------------------------------
    order_number_attempts: int = Field(default=5, ge=1)

    # --- HTTP -----------------------------------------------------------------
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    admin_token: str | None = Field(
        default=None,
        description="Shared secret for admin routes; unset disables the check",
    )
    static_dir: str = Field(default="public")
    upload_dir: str = Field(default="uploads")
    max_upload_bytes: int = Field(default=5 * 1024 * 1024)

    # --- Logging --------------------------------------------------------------
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)
