"""Tests for the document models and their persisted shape."""
import pytest

from leaddesk.models.base import as_number, later_of, newest_first, parse_timestamp
from leaddesk.models.crm_queue import CrmQueueItem
from leaddesk.models.document import SCHEMA_VERSION, Document, empty_document
from leaddesk.models.lead import Lead
from leaddesk.models.snapshot import EstimatorSnapshot


class TestLead:

    def test_defaults(self, make_lead):
        lead = make_lead()
        assert lead.status == 'new'
        assert lead.score == 0
        assert lead.grade == 'C'
        assert lead.score_reasons == []
        assert lead.session_id == 'anonymous'
        assert lead.updated_at == lead.created_at

    def test_persisted_keys_are_camel_case(self, make_lead):
        data = make_lead(session_id='s1').to_dict()
        assert set(data) == {
            'id', 'name', 'email', 'fleetSize', 'priority', 'message', 'sessionId',
            'source', 'status', 'score', 'grade', 'scoreReasons', 'createdAt', 'updatedAt',
        }

    def test_from_dict_coerces_bad_values(self):
        lead = Lead.from_dict({'id': 'x', 'status': 'bogus', 'grade': 'Z', 'score': -5, 'scoreReasons': 'nope'})
        assert lead.status == 'new'
        assert lead.grade == 'C'
        assert lead.score == 0
        assert lead.score_reasons == []


class TestCrmQueueItem:

    def test_for_lead_copies_crm_fields(self, make_lead):
        lead = make_lead(score=45, grade='A')
        item = CrmQueueItem.for_lead(lead)
        assert item.lead_id == lead.id
        assert item.created_at == lead.created_at
        assert item.payload == {
            'name': lead.name,
            'email': lead.email,
            'priority': lead.priority,
            'score': 45,
            'grade': 'A',
        }
        assert item.pending

    def test_synced_item_not_pending(self, make_lead):
        item = CrmQueueItem.for_lead(make_lead())
        item.synced_at = '2026-01-01T00:00:00+00:00'
        assert not item.pending
        assert CrmQueueItem.from_dict(item.to_dict()).synced_at == item.synced_at


class TestDocument:

    def test_empty_document_shape(self):
        raw = empty_document()
        assert raw['schemaVersion'] == SCHEMA_VERSION
        assert Document.from_dict(raw) == Document()

    def test_find_lead(self, make_lead):
        lead = make_lead()
        doc = Document(leads=[make_lead(), lead])
        assert doc.find_lead(lead.id) is lead
        assert doc.find_lead('missing') is None

    def test_latest_snapshot_for_session(self):
        first = EstimatorSnapshot(session_id='s1', annual_burden=100)
        other = EstimatorSnapshot(session_id='s2', annual_burden=200)
        latest = EstimatorSnapshot(session_id='s1', annual_burden=300)
        doc = Document(estimator_snapshots=[first, other, latest])
        assert doc.latest_snapshot_for('s1') is latest
        assert doc.latest_snapshot_for('nope') is None

    def test_from_dict_skips_non_object_rows(self):
        doc = Document.from_dict({'leads': ['junk', {'id': 'a', 'name': 'A'}], 'events': 'junk'})
        assert [l.id for l in doc.leads] == ['a']
        assert doc.events == []


class TestHelpers:

    def test_parse_timestamp_accepts_z_suffix(self):
        assert parse_timestamp('2026-01-01T00:00:00.000Z') == parse_timestamp('2026-01-01T00:00:00+00:00')

    @pytest.mark.parametrize('value', [None, '', 'yesterday', 12])
    def test_parse_timestamp_invalid(self, value):
        assert parse_timestamp(value) is None

    def test_later_of(self):
        early, late = '2026-01-01T00:00:00+00:00', '2026-01-02T00:00:00+00:00'
        assert later_of(late, early) == late
        assert later_of(early, late) == late
        assert later_of(early, 'garbage') == 'garbage'

    def test_newest_first(self):
        rows = [('a', '2026-01-01T00:00:00Z'), ('b', '2026-01-03T00:00:00Z'), ('c', 'bad')]
        assert [r[0] for r in newest_first(rows, key=lambda r: r[1])] == ['b', 'a', 'c']

    @pytest.mark.parametrize('value, expected', [
        (5, 5),
        ('7.5', 7.5),
        (True, 0),
        (None, 0),
        ('abc', 0),
        (float('nan'), 0),
        (float('inf'), 0),
        (3.0, 3),
    ])
    def test_as_number(self, value, expected):
        assert as_number(value) == expected
