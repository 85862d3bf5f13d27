"""
Outbound CRM sync — push queued leads to a CRM and stamp them as synced.

Every client implements CrmClient.push(). sync_all() only sees that uniform
interface, so swapping the mock for a real integration leaves queueing and
auditing untouched.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

import requests

from leaddesk.models.base import utcnow_iso
from leaddesk.models.crm_queue import CrmQueueItem
from leaddesk.models.document import Document

logger = logging.getLogger('pipeline.crm')


@dataclass
class SyncResult:
    """Outcome of one sync pass."""
    synced: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)


class CrmClient(ABC):
    """Base class for outbound CRM integrations."""
    name: str = ''

    @abstractmethod
    def push(self, item: CrmQueueItem) -> None:
        """Deliver one queued lead. Raise to leave the item pending."""
        ...


class MockCrmClient(CrmClient):
    """Accepts everything; nothing leaves the process."""
    name = 'mock'

    def __init__(self):
        self.pushed: List[str] = []

    def push(self, item: CrmQueueItem) -> None:
        self.pushed.append(item.id)
        logger.debug("Mock CRM accepted queue item %s (lead %s)", item.id, item.lead_id)


class WebhookCrmClient(CrmClient):
    """POSTs each queued lead as JSON to a CRM intake webhook."""
    name = 'webhook'

    def __init__(self, url: str, api_key: Optional[str] = None, timeout: float = 10):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout

    def push(self, item: CrmQueueItem) -> None:
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        body = {
            'queue_item_id': item.id,
            'lead_id': item.lead_id,
            'queued_at': item.created_at,
            **item.payload,
        }
        response = requests.post(self.url, json=body, headers=headers, timeout=self.timeout)
        response.raise_for_status()


def sync_all(document: Document, client: CrmClient, now: Optional[str] = None) -> SyncResult:
    """
    Push every pending queue item and stamp the ones that went through.

    Items that fail stay pending for the next pass. Already-synced items are
    never pushed again, so a second pass right after a full one syncs 0.
    """
    now = now or utcnow_iso()
    result = SyncResult()

    for item in document.pending_crm_items():
        try:
            client.push(item)
        except Exception as e:
            logger.error("Error syncing queue item %s via %s: %s", item.id, client.name, e)
            result.failed += 1
            result.errors.append(f"{item.id}: {e}")
            continue
        item.synced_at = now
        result.synced += 1

    logger.info("CRM sync via %s — synced: %d, failed: %d", client.name, result.synced, result.failed)
    return result


def build_crm_client(webhook_url: Optional[str] = None, api_key: Optional[str] = None,
                     timeout: float = 10) -> CrmClient:
    """Webhook client when a URL is configured, otherwise the mock."""
    if webhook_url:
        return WebhookCrmClient(webhook_url, api_key=api_key, timeout=timeout)
    return MockCrmClient()
