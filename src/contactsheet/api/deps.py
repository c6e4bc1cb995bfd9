from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from fastapi import FastAPI, Request
from loguru import logger

from ..config import Credentials, IntakeConfig, store_backend_from_env
from ..intake import IntakePipeline, zone_clock
from ..notify import ErrorNotifier, HttpMailChannel, NotificationChannel, SmtpChannel
from ..sheets import MemoryStore, SheetsApiClient, SpreadsheetOpener


def build_channels(config: IntakeConfig, credentials: Credentials) -> List[NotificationChannel]:
    """SMTP first, then the HTTP mail API, skipping whichever is not configured."""
    channels: List[NotificationChannel] = []
    if credentials.smtp_host:
        channels.append(
            SmtpChannel(
                host=credentials.smtp_host,
                port=credentials.smtp_port,
                sender=config.sender_email,
                username=credentials.smtp_username,
                password=credentials.smtp_password,
            )
        )
    if credentials.mail_api_key:
        channels.append(
            HttpMailChannel(
                url=credentials.mail_api_url,
                api_key=credentials.mail_api_key,
                sender=config.sender_email,
            )
        )
    if not channels:
        logger.warning("No notification channel configured; operator emails will only be logged")
    return channels


def build_opener(config: IntakeConfig, credentials: Credentials, backend: str) -> SpreadsheetOpener:
    if backend == "memory":
        store = MemoryStore()
        store.create(config.spreadsheet_id, config.sheet_name)
        logger.info("Using in-memory spreadsheet '{}'", config.spreadsheet_id)
        return store
    if backend != "sheets":
        raise RuntimeError(f"Unknown CONTACTSHEET_STORE backend: {backend!r}")
    if not credentials.sheets_token:
        raise RuntimeError("CONTACTSHEET_SHEETS_TOKEN is not set (or use CONTACTSHEET_STORE=memory).")
    return SheetsApiClient(access_token=credentials.sheets_token)


def build_pipeline(
    config: Optional[IntakeConfig] = None,
    credentials: Optional[Credentials] = None,
    backend: Optional[str] = None,
) -> IntakePipeline:
    """Assemble the pipeline from static config plus environment secrets."""
    config = config or IntakeConfig.from_env()
    credentials = credentials or Credentials.from_env()
    clock = zone_clock(config.timezone)
    notifier = ErrorNotifier(
        recipient=config.operator_email,
        channels=build_channels(config, credentials),
        store_url=config.spreadsheet_url,
        clock=clock,
    )
    opener = build_opener(config, credentials, backend or store_backend_from_env())
    return IntakePipeline(config, opener, notifier, clock)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    App startup:
      - build the intake pipeline unless one was injected via create_app()
    """
    if getattr(app.state, "pipeline", None) is None:
        app.state.pipeline = build_pipeline()
    logger.info("Intake pipeline ready (sheet '{}')", app.state.pipeline.config.sheet_name)
    yield


async def get_pipeline(request: Request) -> IntakePipeline:
    """
    Dependency to retrieve the IntakePipeline from app.state.
    """
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise RuntimeError("IntakePipeline not available on app.state (lifespan not initialized).")
    return pipeline
