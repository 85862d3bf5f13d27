"""
Dashboard and funnel aggregates over a lead collection.

Status/grade filters narrow the leads only; event, snapshot, draft and CRM
queue totals always cover the whole document.
"""
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from leaddesk.config import LEAD_STATUSES, RECENT_LEADS_LIMIT, TOP_PRIORITIES_LIMIT
from leaddesk.models.base import newest_first
from leaddesk.models.document import Document
from leaddesk.models.lead import Lead

# Funnel rate key → status it measures
FUNNEL_RATES = {
    'qualifiedRate': 'qualified',
    'contactedRate': 'contacted',
    'proposalRate': 'proposal_sent',
    'winRate': 'won',
}


def filter_leads(leads: Iterable[Lead], status: Optional[str] = None, grade: Optional[str] = None) -> List[Lead]:
    status = (status or '').strip()
    grade = (grade or '').strip().upper()
    return [
        lead for lead in leads
        if (not status or lead.status == status) and (not grade or lead.grade == grade)
    ]


def status_counts(leads: Iterable[Lead]) -> Dict[str, int]:
    """Count per status; every known status is present."""
    counts = {status: 0 for status in LEAD_STATUSES}
    for lead in leads:
        if lead.status in counts:
            counts[lead.status] += 1
    return counts


def top_priorities(leads: Iterable[Lead], limit: int = TOP_PRIORITIES_LIMIT) -> List[Dict[str, Any]]:
    """Most frequent priorities; ties keep the order priorities were first seen."""
    counter = Counter(lead.priority for lead in leads)
    ranked = sorted(counter.items(), key=lambda item: item[1], reverse=True)
    return [{'priority': priority, 'count': count} for priority, count in ranked[:limit]]


def percent(part: int, total: int) -> float:
    return round(part / max(total, 1) * 100, 2)


def dashboard_summary(document: Document, leads: List[Lead], recent_limit: int = RECENT_LEADS_LIMIT) -> Dict[str, Any]:
    total_score = sum(lead.score for lead in leads)
    avg_score = round(total_score / len(leads), 2) if leads else 0

    return {
        'totals': {
            'leads': len(leads),
            'events': len(document.events),
            'estimatorSnapshots': len(document.estimator_snapshots),
            'pendingCrmSync': len(document.pending_crm_items()),
            'outreachDrafts': len(document.outreach_drafts),
            'avgScore': avg_score,
        },
        'statusCounts': status_counts(leads),
        'topPriorities': top_priorities(leads),
        'recentLeads': [
            lead.to_dict()
            for lead in newest_first(leads, key=lambda l: l.created_at)[:recent_limit]
        ],
    }


def funnel_analytics(leads: List[Lead]) -> Dict[str, Any]:
    counts = status_counts(leads)
    total = len(leads)
    return {
        'counts': counts,
        'rates': {key: percent(counts[status], total) for key, status in FUNNEL_RATES.items()},
        'total': total,
    }
