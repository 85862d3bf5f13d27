"""
Lead routes — public form intake, lead lookup, status workflow.
"""
import logging

from flask import Blueprint, jsonify

from leaddesk.config import ELEVATED_STATUSES, LEAD_STATUSES
from leaddesk.errors import NotFoundError, ValidationError
from leaddesk.extensions import get_components
from leaddesk.models.audit_event import PUBLIC_FORM_ACTOR
from leaddesk.models.base import later_of, utcnow_iso
from leaddesk.models.crm_queue import CrmQueueItem
from leaddesk.pipeline.scoring import apply_score
from leaddesk.routes.common import current_identity, parse_json_body, rate_limited, require_auth
from leaddesk.services import auth
from leaddesk.services.audit import append_audit
from leaddesk.services.intake import build_lead, normalize_text

logger = logging.getLogger('routes.leads')

bp = Blueprint('leads', __name__, url_prefix='/api/leads')


@bp.route('', methods=['POST'])
@rate_limited('leads', 'Too many lead submissions. Please try again shortly.')
def create_lead():
    """Score a form submission, queue it for CRM sync and audit it."""
    lead = build_lead(parse_json_body())

    with get_components().store.transaction() as doc:
        apply_score(lead, doc.latest_snapshot_for(lead.session_id))

        doc.leads.append(lead)
        doc.crm_queue.append(CrmQueueItem.for_lead(lead))
        append_audit(doc, PUBLIC_FORM_ACTOR, 'lead.created', 'lead', lead.id, {
            'priority': lead.priority,
            'grade': lead.grade,
        })

    logger.info("Lead %s created: score=%d grade=%s", lead.id, lead.score, lead.grade)
    return jsonify({'ok': True, 'leadId': lead.id, 'score': lead.score, 'grade': lead.grade}), 201


@bp.route('/<lead_id>')
@require_auth
def get_lead(lead_id):
    lead = get_components().store.load().find_lead(lead_id)
    if lead is None:
        raise NotFoundError('Lead not found.')
    return jsonify({'lead': lead.to_dict()})


@bp.route('/<lead_id>/status', methods=['PATCH'])
@require_auth
def update_status(lead_id):
    """
    Move a lead to any status.

    There is no transition graph; only the target status is gated, and
    won/lost/proposal_sent need an admin.
    """
    identity = current_identity()
    status = normalize_text(parse_json_body().get('status'))
    if status not in LEAD_STATUSES:
        raise ValidationError('Invalid status value.')
    if status in ELEVATED_STATUSES:
        auth.require_role(identity, ['admin'])

    with get_components().store.transaction() as doc:
        lead = doc.find_lead(lead_id)
        if lead is None:
            raise NotFoundError('Lead not found.')

        old_status = lead.status
        lead.status = status
        lead.updated_at = later_of(lead.created_at, utcnow_iso())
        append_audit(doc, identity.to_actor(), 'lead.status_changed', 'lead', lead_id, {
            'from': old_status,
            'to': status,
        })

    logger.info("Lead %s status %s → %s by %s", lead_id, old_status, status, identity.username)
    return jsonify({'ok': True, 'lead': lead.to_dict()})
