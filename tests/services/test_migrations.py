"""Tests for leaddesk.services.migrations — schema upgrade and lead backfill on load."""
import json
import os

from leaddesk.models.document import SCHEMA_VERSION
from leaddesk.services.migrations import backfill_leads, migrate
from leaddesk.services.store import DocumentStore


def _legacy_document():
    return {
        'leads': [
            {
                'id': 'lead-1',
                'name': 'Old Lead',
                'email': 'old@example.com',
                'fleetSize': '90',
                'priority': 'Acquire units',
                'message': 'hello',
                'createdAt': '2025-06-01T12:00:00.000Z',
            },
            {
                'id': 'lead-2',
                'name': 'Odd Status',
                'email': 'odd@example.com',
                'status': 'archived',
                'score': 33,
                'grade': 'B',
                'scoreReasons': ['x'],
                'createdAt': '2025-06-02T12:00:00.000Z',
                'updatedAt': '2025-06-03T12:00:00.000Z',
            },
        ],
        'estimatorSnapshots': [
            {'id': 's1', 'sessionId': 'abc', 'idleShare': 20, 'carryingCost': 900, 'annualBurden': 216000},
        ],
        'crmQueue': 'corrupt',
    }


class TestMigrate:

    def test_backfills_missing_lead_fields(self):
        raw, changed = migrate(_legacy_document())
        assert changed is True
        lead = raw['leads'][0]
        assert lead['status'] == 'new'
        assert lead['score'] == 0
        assert lead['grade'] == 'C'
        assert lead['scoreReasons'] == []
        assert lead['updatedAt'] == lead['createdAt']

    def test_unknown_status_resets_to_new(self):
        raw, _ = migrate(_legacy_document())
        lead = raw['leads'][1]
        assert lead['status'] == 'new'
        assert lead['score'] == 33
        assert lead['grade'] == 'B'

    def test_renames_legacy_snapshot_fields(self):
        raw, _ = migrate(_legacy_document())
        snapshot = raw['estimatorSnapshots'][0]
        assert snapshot['idleSharePercent'] == 20
        assert snapshot['monthlyCarryingCost'] == 900
        assert 'idleShare' not in snapshot
        assert 'carryingCost' not in snapshot

    def test_normalizes_collections_and_stamps_version(self):
        raw, _ = migrate(_legacy_document())
        assert raw['crmQueue'] == []
        assert raw['outreachDrafts'] == []
        assert raw['schemaVersion'] == SCHEMA_VERSION

    def test_idempotent(self):
        raw, _ = migrate(_legacy_document())
        again, changed = migrate(json.loads(json.dumps(raw)))
        assert changed is False
        assert again == raw

    def test_non_object_root_becomes_empty_document(self):
        raw, changed = migrate(['not', 'a', 'document'])
        assert changed is True
        assert raw['leads'] == []

    def test_backfill_missing_created_at(self):
        raw = {'leads': [{'id': 'x'}]}
        assert backfill_leads(raw, now='2026-01-01T00:00:00+00:00') is True
        assert raw['leads'][0]['createdAt'] == '2026-01-01T00:00:00+00:00'
        assert raw['leads'][0]['updatedAt'] == '2026-01-01T00:00:00+00:00'


class TestLoadPersistsMigration:

    def test_legacy_file_is_rewritten_once(self, db_file):
        os.makedirs(os.path.dirname(db_file), exist_ok=True)
        with open(db_file, 'w') as f:
            json.dump(_legacy_document(), f)

        doc = DocumentStore(db_file).load()
        assert doc.leads[0].status == 'new'
        assert doc.estimator_snapshots[0].monthly_carrying_cost == 900

        with open(db_file) as f:
            persisted = json.load(f)
        assert persisted['schemaVersion'] == SCHEMA_VERSION
        assert persisted['leads'][0]['grade'] == 'C'

        mtime = os.stat(db_file).st_mtime_ns
        DocumentStore(db_file).load()
        assert os.stat(db_file).st_mtime_ns == mtime

    def test_legacy_file_with_non_object_snapshot_row_loads(self, db_file):
        os.makedirs(os.path.dirname(db_file), exist_ok=True)
        with open(db_file, 'w') as f:
            json.dump({'leads': [], 'estimatorSnapshots': [42, {'idleShare': 3}]}, f)

        doc = DocumentStore(db_file).load()
        assert [s.idle_share_percent for s in doc.estimator_snapshots] == [3]
