"""Tests for leaddesk.pipeline.analytics — dashboard summary and funnel."""
import pytest

from leaddesk.config import LEAD_STATUSES
from leaddesk.models.crm_queue import CrmQueueItem
from leaddesk.models.document import Document
from leaddesk.models.event import Event
from leaddesk.pipeline.analytics import (
    dashboard_summary,
    filter_leads,
    funnel_analytics,
    status_counts,
    top_priorities,
)


@pytest.fixture
def leads(make_lead):
    return [
        make_lead(name='A', priority='Acquire units', status='new', grade='A', score=45,
                  created_at='2026-01-01T10:00:00+00:00'),
        make_lead(name='B', priority='Sell off units', status='qualified', grade='B', score=30,
                  created_at='2026-01-03T10:00:00+00:00'),
        make_lead(name='C', priority='Sell off units', status='won', grade='C', score=5,
                  created_at='2026-01-02T10:00:00+00:00'),
        make_lead(name='D', priority='Acquire units', status='qualified', grade='B', score=26,
                  created_at='2026-01-04T10:00:00Z'),
    ]


class TestFilterLeads:

    def test_no_filters_returns_everything(self, leads):
        assert filter_leads(leads) == leads

    def test_status_filter(self, leads):
        assert [l.name for l in filter_leads(leads, status='qualified')] == ['B', 'D']

    def test_grade_filter_is_case_insensitive(self, leads):
        assert [l.name for l in filter_leads(leads, grade='b')] == ['B', 'D']

    def test_combined_filters(self, leads):
        assert [l.name for l in filter_leads(leads, status='qualified', grade='B')] == ['B', 'D']
        assert filter_leads(leads, status='won', grade='A') == []


class TestStatusCounts:

    def test_all_statuses_present_and_zero_filled(self):
        assert status_counts([]) == {status: 0 for status in LEAD_STATUSES}

    def test_counts_sum_to_total(self, leads):
        counts = status_counts(leads)
        assert sum(counts.values()) == len(leads)
        assert counts['qualified'] == 2


class TestTopPriorities:

    def test_ties_keep_first_seen_order(self, leads):
        assert top_priorities(leads) == [
            {'priority': 'Acquire units', 'count': 2},
            {'priority': 'Sell off units', 'count': 2},
        ]

    def test_sorted_by_count_and_capped(self, make_lead):
        leads = [make_lead(priority=p) for p in 'abbcccddddeeeeeffffff']
        ranked = top_priorities(leads)
        assert [r['priority'] for r in ranked] == ['f', 'e', 'd', 'c', 'b']


class TestDashboardSummary:

    def test_totals(self, leads):
        doc = Document(
            leads=leads,
            events=[Event(event_type='page_view')],
            crm_queue=[CrmQueueItem.for_lead(l) for l in leads],
        )
        doc.crm_queue[0].synced_at = '2026-01-05T00:00:00+00:00'

        summary = dashboard_summary(doc, leads)
        assert summary['totals'] == {
            'leads': 4,
            'events': 1,
            'estimatorSnapshots': 0,
            'pendingCrmSync': 3,
            'outreachDrafts': 0,
            'avgScore': 26.5,
        }
        assert sum(summary['statusCounts'].values()) == summary['totals']['leads']

    def test_avg_score_rounded_to_two_decimals(self, make_lead):
        leads = [make_lead(score=10), make_lead(score=10), make_lead(score=11)]
        summary = dashboard_summary(Document(leads=leads), leads)
        assert summary['totals']['avgScore'] == 10.33

    def test_empty(self):
        summary = dashboard_summary(Document(), [])
        assert summary['totals']['avgScore'] == 0
        assert summary['recentLeads'] == []
        assert summary['topPriorities'] == []

    def test_recent_leads_newest_first_and_limited(self, leads):
        summary = dashboard_summary(Document(leads=leads), leads, recent_limit=3)
        assert [l['name'] for l in summary['recentLeads']] == ['D', 'B', 'C']

    def test_filtered_leads_do_not_filter_other_totals(self, leads):
        doc = Document(leads=leads, events=[Event(event_type='x'), Event(event_type='y')])
        summary = dashboard_summary(doc, filter_leads(leads, status='won'))
        assert summary['totals']['leads'] == 1
        assert summary['totals']['events'] == 2


class TestFunnelAnalytics:

    def test_zero_leads_yield_zero_rates(self):
        funnel = funnel_analytics([])
        assert funnel['total'] == 0
        assert funnel['rates'] == {
            'qualifiedRate': 0,
            'contactedRate': 0,
            'proposalRate': 0,
            'winRate': 0,
        }

    def test_rates(self, leads):
        funnel = funnel_analytics(leads)
        assert funnel['counts']['qualified'] == 2
        assert funnel['rates']['qualifiedRate'] == 50.0
        assert funnel['rates']['winRate'] == 25.0
        assert funnel['rates']['contactedRate'] == 0

    def test_rates_round_to_two_decimals(self, make_lead):
        leads = [make_lead(status='won'), make_lead(), make_lead()]
        assert funnel_analytics(leads)['rates']['winRate'] == 33.33

    def test_rates_within_bounds(self, make_lead):
        leads = [make_lead(status=s) for s in LEAD_STATUSES for _ in range(3)]
        for rate in funnel_analytics(leads)['rates'].values():
            assert 0 <= rate <= 100
