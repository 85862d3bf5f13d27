"""
Telemetry routes — browser events and estimator snapshots.

Both are best-effort: once the payload validates, a failed write is logged
and the browser still gets 202.
"""
import logging

from flask import Blueprint, jsonify

from leaddesk.extensions import get_components
from leaddesk.routes.common import parse_json_body, rate_limited
from leaddesk.services.intake import build_event, build_snapshot

logger = logging.getLogger('routes.telemetry')

bp = Blueprint('telemetry', __name__, url_prefix='/api')


@bp.route('/events', methods=['POST'])
@rate_limited('events', 'Too many events.')
def record_event():
    event = build_event(parse_json_body())
    try:
        with get_components().store.transaction() as doc:
            doc.events.append(event)
    except Exception as e:
        logger.error("Dropped event %s (%s): %s", event.id, event.event_type, e, exc_info=True)
    return jsonify({'ok': True}), 202


@bp.route('/estimator-snapshot', methods=['POST'])
@rate_limited('snapshot', 'Too many requests.')
def record_snapshot():
    snapshot = build_snapshot(parse_json_body())
    try:
        with get_components().store.transaction() as doc:
            doc.estimator_snapshots.append(snapshot)
    except Exception as e:
        logger.error("Dropped estimator snapshot %s: %s", snapshot.id, e, exc_info=True)
    return jsonify({'ok': True}), 202
