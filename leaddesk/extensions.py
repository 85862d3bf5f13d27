"""
Per-app components — document store, rate limiter, auth sessions, CRM client.

Built once by create_app() and kept on ``app.extensions`` so every app (and
every test app) owns its own in-memory state. Routes fetch them through
get_components().
"""
import logging
from dataclasses import dataclass

from flask import current_app

from leaddesk.pipeline.crm import CrmClient, build_crm_client
from leaddesk.services.auth import AuthManager
from leaddesk.services.rate_limiter import RouteRateLimiter
from leaddesk.services.store import DocumentStore

logger = logging.getLogger('leaddesk.extensions')

EXTENSION_KEY = 'leaddesk'


@dataclass
class Components:
    store: DocumentStore
    rate_limiter: RouteRateLimiter
    auth: AuthManager
    crm_client: CrmClient


def init_components(app) -> Components:
    cfg = app.config

    store = DocumentStore(cfg['DB_FILE'])
    store.initialize()
    logger.info("Document store ready at %s", cfg['DB_FILE'])

    if not cfg.get('ADVISOR_API_KEY'):
        logger.warning("ADVISOR_API_KEY not set — only session logins are accepted")

    crm_client = build_crm_client(
        cfg.get('CRM_WEBHOOK_URL'),
        api_key=cfg.get('CRM_API_KEY'),
        timeout=cfg.get('CRM_TIMEOUT_SECONDS', 10),
    )
    logger.info("Outbound CRM client: %s", crm_client.name)

    components = Components(
        store=store,
        rate_limiter=RouteRateLimiter(),
        auth=AuthManager(
            users=cfg['ADVISOR_USERS'],
            api_key=cfg.get('ADVISOR_API_KEY'),
            ttl_seconds=cfg['AUTH_TOKEN_TTL_SECONDS'],
        ),
        crm_client=crm_client,
    )
    app.extensions[EXTENSION_KEY] = components
    return components


def get_components() -> Components:
    return current_app.extensions[EXTENSION_KEY]
