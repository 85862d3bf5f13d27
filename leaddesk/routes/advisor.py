"""
Advisor routes — recommendations, outreach drafts, audit trail, CRM sync.
"""
import logging

from flask import Blueprint, current_app, jsonify, request

from leaddesk.errors import NotFoundError, ValidationError
from leaddesk.extensions import get_components
from leaddesk.models.outreach import OutreachDraft
from leaddesk.pipeline.crm import sync_all
from leaddesk.pipeline.recommendations import compose_outreach_draft, recommend_for_lead
from leaddesk.routes.common import current_identity, parse_json_body, require_auth, require_role
from leaddesk.services.audit import append_audit, recent_audit_events
from leaddesk.services.intake import normalize_text

logger = logging.getLogger('routes.advisor')

bp = Blueprint('advisor', __name__, url_prefix='/api')


@bp.route('/recommendations/<lead_id>')
@require_auth
def recommendations(lead_id):
    lead = get_components().store.load().find_lead(lead_id)
    if lead is None:
        raise NotFoundError('Lead not found.')
    return jsonify({'leadId': lead_id, 'recommendation': recommend_for_lead(lead).to_dict()})


@bp.route('/outreach/draft', methods=['POST'])
@require_auth
def create_outreach_draft():
    lead_id = normalize_text(parse_json_body().get('leadId'))
    if not lead_id:
        raise ValidationError('leadId is required')

    identity = current_identity()
    with get_components().store.transaction() as doc:
        lead = doc.find_lead(lead_id)
        if lead is None:
            raise NotFoundError('Lead not found.')

        subject, body = compose_outreach_draft(lead, recommend_for_lead(lead))
        draft = OutreachDraft(lead_id=lead_id, subject=subject, body=body)
        doc.outreach_drafts.append(draft)
        append_audit(doc, identity.to_actor(), 'outreach.draft_created', 'lead', lead_id, {
            'draftId': draft.id,
        })

    return jsonify({'ok': True, 'draft': draft.to_dict()}), 201


def _audit_limit() -> int:
    default = current_app.config['AUDIT_DEFAULT_LIMIT']
    ceiling = current_app.config['AUDIT_MAX_LIMIT']
    limit = request.args.get('limit', default, type=int)
    if limit < 1:
        return default
    return min(limit, ceiling)


@bp.route('/audit')
@require_auth
def audit():
    doc = get_components().store.load()
    events = recent_audit_events(doc, _audit_limit())
    return jsonify({'events': [event.to_dict() for event in events]})


@bp.route('/crm-sync/mock', methods=['POST'])
@require_auth
@require_role('admin')
def crm_sync():
    components = get_components()
    identity = current_identity()
    with components.store.transaction() as doc:
        result = sync_all(doc, components.crm_client)
        append_audit(doc, identity.to_actor(), 'crm.sync_mock', 'crmQueue', 'all', {
            'synced': result.synced,
            'failed': result.failed,
        })
    return jsonify({'ok': True, 'synced': result.synced})
