"""
Dashboard routes — summary KPIs, funnel analytics, health check.
"""
from flask import Blueprint, current_app, jsonify, request

from leaddesk.extensions import get_components
from leaddesk.pipeline.analytics import dashboard_summary, filter_leads, funnel_analytics
from leaddesk.routes.common import require_auth

bp = Blueprint('dashboard', __name__)


def _filtered_leads(doc):
    return filter_leads(doc.leads, request.args.get('status'), request.args.get('grade'))


@bp.route('/health')
def health_check():
    """Health check endpoint."""
    return jsonify({"status": "healthy"}), 200


@bp.route('/api/dashboard')
@require_auth
def dashboard():
    doc = get_components().store.load()
    return jsonify(dashboard_summary(
        doc,
        _filtered_leads(doc),
        recent_limit=current_app.config['RECENT_LEADS_LIMIT'],
    ))


@bp.route('/api/analytics/funnel')
@require_auth
def funnel():
    doc = get_components().store.load()
    return jsonify(funnel_analytics(_filtered_leads(doc)))
