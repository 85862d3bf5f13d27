#!/usr/bin/env python3
"""
Seed demo leads for checking the advisor dashboard locally.

Creates estimator snapshots and leads covering each grade, moves a few leads
along the funnel, and queues every lead for CRM sync, through the same
scoring and audit code the API uses.

Usage:
    python scripts/seed_demo_data.py          # append demo data
    python scripts/seed_demo_data.py --clear  # wipe seeded leads first

Writes to DB_FILE (default ./data/db.json).
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from leaddesk.config import DB_FILE
from leaddesk.logging_config import configure_logging
from leaddesk.models.audit_event import Actor, PUBLIC_FORM_ACTOR
from leaddesk.models.crm_queue import CrmQueueItem
from leaddesk.models.lead import Lead
from leaddesk.models.snapshot import EstimatorSnapshot
from leaddesk.pipeline.scoring import apply_score
from leaddesk.services.audit import append_audit
from leaddesk.services.store import DocumentStore

SEED_PREFIX = 'seed-'

SEED_ACTOR = Actor(type='system', username='seed-script')

# (name, email, fleet size, priority, message, annual burden, final status)
DEMO_LEADS = [
    ('Dana Whitfield', 'dana@northhaul.example', '220 trucks', 'Need both acquisition and sell-off',
     'We need a plan ASAP before Q3 renewals.', 640000, 'qualified'),
    ('Marco Silva', 'marco@coastfreight.example', '95 tractors', 'Acquire units',
     'Looking to expand our regional fleet.', 260000, 'contacted'),
    ('Priya Nair', 'priya@greenroute.example', '40 vans', 'Sell off units',
     'Several vans sit idle most weeks.', 90000, 'new'),
    ('Tom Becker', 'tom@beckerlogistics.example', '160', 'Sell off units',
     'Urgent: yard is over capacity.', 310000, 'proposal_sent'),
    ('Lena Ortiz', 'lena@ortizmoving.example', 'about 12 box trucks', 'General question',
     'Just exploring options for next year.', 0, 'new'),
]


def seed(store: DocumentStore, clear: bool = False):
    with store.transaction() as doc:
        if clear:
            seeded = {lead.id for lead in doc.leads if lead.session_id.startswith(SEED_PREFIX)}
            doc.leads = [lead for lead in doc.leads if lead.id not in seeded]
            doc.crm_queue = [item for item in doc.crm_queue if item.lead_id not in seeded]
            doc.estimator_snapshots = [
                s for s in doc.estimator_snapshots if not s.session_id.startswith(SEED_PREFIX)
            ]
            print(f"Cleared {len(seeded)} seeded leads")

        for idx, (name, email, fleet, priority, message, burden, status) in enumerate(DEMO_LEADS, 1):
            session_id = f'{SEED_PREFIX}{idx}'
            snapshot = None
            if burden:
                snapshot = EstimatorSnapshot(session_id=session_id, annual_burden=burden)
                doc.estimator_snapshots.append(snapshot)

            lead = Lead(
                name=name,
                email=email,
                fleet_size=fleet,
                priority=priority,
                message=message,
                session_id=session_id,
            )
            apply_score(lead, snapshot)
            doc.leads.append(lead)
            doc.crm_queue.append(CrmQueueItem.for_lead(lead))
            append_audit(doc, PUBLIC_FORM_ACTOR, 'lead.created', 'lead', lead.id, {
                'priority': lead.priority,
                'grade': lead.grade,
            })

            if status != lead.status:
                append_audit(doc, SEED_ACTOR, 'lead.status_changed', 'lead', lead.id, {
                    'from': lead.status,
                    'to': status,
                })
                lead.status = status

            print(f"  {name:<16} score={lead.score:>3} grade={lead.grade} status={lead.status}")


def main():
    parser = argparse.ArgumentParser(description='Seed demo leads into the document store.')
    parser.add_argument('--clear', action='store_true', help='remove previously seeded leads first')
    parser.add_argument('--db-file', default=DB_FILE, help=f'document path (default: {DB_FILE})')
    args = parser.parse_args()

    configure_logging()
    store = DocumentStore(args.db_file)
    store.initialize()
    seed(store, clear=args.clear)
    print(f"Seeded {len(DEMO_LEADS)} leads into {args.db_file}")


if __name__ == '__main__':
    main()
