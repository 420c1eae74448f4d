"""
Dependency wiring for the API.

The store, the Zoho clients and the mailer are process-wide singletons built
lazily from configuration. Tests swap them through
`app.dependency_overrides`.
"""
import os
import hmac
import logging
from functools import lru_cache

from fastapi import Depends, Header, HTTPException, status, Request

from src.grants.controller import ApplicationController
from src.grants.intake import IntakeWorkflow
from src.grants.notifications import EmailService
from src.integrations.zoho.records import RecordSubmitter
from src.integrations.zoho.reports import ReportReader
from src.integrations.zoho.token_cache import TokenCache
from src.integrations.zoho.uploads import FileAttacher
from src.utils.config_loader import IntakeConfig, load_intake_config

logger = logging.getLogger(__name__)

_ALLOWLIST_PATHS = {
    "/",
    "/health",
    "/docs",
    "/docs/oauth2-redirect",
    "/openapi.json",
    "/redoc",
}


def get_api_keys():
    keys = os.getenv("API_KEYS", "")
    return [k.strip() for k in keys.split(",") if k.strip()]


async def api_key_protection(
    request: Request = None,  # keep Request type so FastAPI injects it; default None for direct calls/tests
    x_api_key: str = Header(default=None, alias="X-API-KEY"),
):
    debug = os.getenv("API_KEY_DEBUG", "").lower() in ("1", "true", "yes")
    path = request.url.path if request is not None else "<no-request>"

    valid_keys = get_api_keys()
    if not valid_keys:
        # no keys configured: the API is open
        return

    if request is not None and request.url.path in _ALLOWLIST_PATHS:
        if debug:
            logger.info("API key check: allowlisted path=%s", path)
        return

    candidate = (x_api_key or "").strip()
    ok = bool(candidate) and any(hmac.compare_digest(candidate, k) for k in valid_keys)
    if debug:
        logger.info("API key check: path=%s ok=%s configured_keys=%d", path, ok, len(valid_keys))

    if not ok:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API Key",
        )


@lru_cache(maxsize=1)
def get_config() -> IntakeConfig:
    return load_intake_config()


@lru_cache(maxsize=1)
def get_db():
    """Application store: real Postgres when DATABASE_URL is set, else the in-memory stub."""
    if os.getenv("DATABASE_URL"):
        from src.database.postgres_real import PostgresDB

        return PostgresDB(connection_string=os.environ["DATABASE_URL"])

    from src.database.postgres import PostgresDB

    return PostgresDB()


@lru_cache(maxsize=1)
def get_token_cache() -> TokenCache:
    return TokenCache(get_config().zoho)


def get_controller(db=Depends(get_db)) -> ApplicationController:
    return ApplicationController(db)


def get_record_submitter(
    token_cache: TokenCache = Depends(get_token_cache),
    config: IntakeConfig = Depends(get_config),
) -> RecordSubmitter:
    return RecordSubmitter(config.zoho, token_cache)


def get_file_attacher(
    token_cache: TokenCache = Depends(get_token_cache),
    config: IntakeConfig = Depends(get_config),
) -> FileAttacher:
    return FileAttacher(config.zoho, token_cache)


def get_report_reader(
    token_cache: TokenCache = Depends(get_token_cache),
    config: IntakeConfig = Depends(get_config),
) -> ReportReader:
    return ReportReader(config.zoho, token_cache)


def get_email_service(config: IntakeConfig = Depends(get_config)) -> EmailService:
    return EmailService(config.smtp)


def get_workflow(
    submitter: RecordSubmitter = Depends(get_record_submitter),
    attacher: FileAttacher = Depends(get_file_attacher),
    notifier: EmailService = Depends(get_email_service),
    controller: ApplicationController = Depends(get_controller),
) -> IntakeWorkflow:
    return IntakeWorkflow(submitter, attacher=attacher, notifier=notifier, controller=controller)
