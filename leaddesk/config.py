"""
Centralized configuration — env vars, limits, user directory, status sets.
"""
import os


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── Server ───────────────────────────────────────────────────────────────────
PORT = int(os.getenv('PORT', 4173))
MAX_BODY_BYTES = int(os.getenv('MAX_BODY_BYTES', 1024 * 1024))

# ── Document store ───────────────────────────────────────────────────────────
DATA_DIR = os.getenv('DATA_DIR', os.path.join(os.getcwd(), 'data'))
DB_FILE = os.getenv('DB_FILE', os.path.join(DATA_DIR, 'db.json'))

# ── Auth ─────────────────────────────────────────────────────────────────────
ADVISOR_API_KEY = os.getenv('ADVISOR_API_KEY', 'advisor-dev-key')
AUTH_TOKEN_TTL_SECONDS = 60 * 60 * 8

ADVISOR_USERS = [
    {
        'id': 'u1',
        'username': os.getenv('ADVISOR_USERNAME', 'advisor'),
        'password': os.getenv('ADVISOR_PASSWORD', 'advisor123'),
        'role': 'advisor',
    },
    {
        'id': 'u2',
        'username': os.getenv('ADMIN_USERNAME', 'admin'),
        'password': os.getenv('ADMIN_PASSWORD', 'admin123'),
        'role': 'admin',
    },
]

# ── Rate limits: route key → (max hits, window seconds) ─────────────────────
RATE_LIMITS = {
    'login': (10, 60),
    'leads': (6, 60),
    'events': (120, 60),
    'snapshot': (60, 60),
}

# ── Lead workflow ────────────────────────────────────────────────────────────
LEAD_STATUSES = [
    'new',
    'qualified',
    'contacted',
    'proposal_sent',
    'won',
    'lost',
]

# Target statuses only an admin may set
ELEVATED_STATUSES = {'won', 'lost', 'proposal_sent'}

# ── Dashboard / audit ────────────────────────────────────────────────────────
RECENT_LEADS_LIMIT = 12
TOP_PRIORITIES_LIMIT = 5
AUDIT_DEFAULT_LIMIT = 25
AUDIT_MAX_LIMIT = 100

# ── Outbound CRM ─────────────────────────────────────────────────────────────
CRM_WEBHOOK_URL = os.getenv('CRM_WEBHOOK_URL')
CRM_API_KEY = os.getenv('CRM_API_KEY')
CRM_TIMEOUT_SECONDS = float(os.getenv('CRM_TIMEOUT_SECONDS', 10))
