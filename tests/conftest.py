"""Shared test fixtures."""
import pytest

from leaddesk.models.crm_queue import CrmQueueItem
from leaddesk.models.lead import Lead

API_KEY = 'test-advisor-key'


@pytest.fixture
def db_file(tmp_path):
    """Path of the per-test document file."""
    return str(tmp_path / 'data' / 'db.json')


@pytest.fixture
def app(db_file):
    """Flask test app backed by a throwaway document."""
    from leaddesk import create_app
    app = create_app({
        'TESTING': True,
        'DB_FILE': db_file,
        'ADVISOR_API_KEY': API_KEY,
        'CRM_WEBHOOK_URL': None,
    })
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


@pytest.fixture
def components(app):
    return app.extensions['leaddesk']


@pytest.fixture
def store(components):
    return components.store


def _login(client, username, password):
    resp = client.post('/api/auth/login', json={'username': username, 'password': password})
    assert resp.status_code == 200, resp.get_json()
    return {'Authorization': f"Bearer {resp.get_json()['token']}"}


@pytest.fixture
def advisor_headers(client):
    """Bearer headers for a logged-in advisor-role session."""
    return _login(client, 'advisor', 'advisor123')


@pytest.fixture
def admin_headers(client):
    """Bearer headers for a logged-in admin-role session."""
    return _login(client, 'admin', 'admin123')


@pytest.fixture
def api_key_headers():
    return {'x-advisor-key': API_KEY}


@pytest.fixture
def make_lead():
    """Factory fixture — builds a Lead model with sensible defaults."""
    def _make(**overrides):
        defaults = dict(
            name='Dana Whitfield',
            email='dana@northhaul.example',
            fleet_size='120 trucks',
            priority='Acquire units',
            message='Looking to grow the fleet.',
        )
        defaults.update(overrides)
        return Lead(**defaults)
    return _make


@pytest.fixture
def add_leads(store):
    """Persist leads (with their CRM queue entries) straight into the store."""
    def _add(*leads):
        with store.transaction() as doc:
            for lead in leads:
                doc.leads.append(lead)
                doc.crm_queue.append(CrmQueueItem.for_lead(lead))
        return leads
    return _add


@pytest.fixture
def lead_payload():
    """Valid public form submission."""
    return {
        'name': 'Dana Whitfield',
        'email': 'Dana@NorthHaul.example',
        'fleetSize': '200 trucks',
        'priority': 'Need both acquisition and sell-off',
        'message': 'please help asap',
        'sessionId': 'sess-123',
        'website': '',
    }
