"""
Lead scoring — additive point rules → score, letter grade, reasons.

Categories (evaluated in this order, reasons reported in the same order):
  priority       combined track beats single track
  fleet size     numeric part of the free-text field
  annual burden  from the session's latest estimator snapshot
  urgency        keyword in the message

Within a category only the highest matching tier counts. Scoring is pure and
never raises: missing or malformed inputs just contribute nothing.
"""
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from leaddesk.models.base import as_number

logger = logging.getLogger('pipeline.scoring')

_NUMBER_RE = re.compile(r'\d+(?:\.\d+)?')


# ── Scoring config (YAML with hardcoded fallback) ────────────────────────────

_scoring_config = None


def _default_config():
    """Hardcoded fallback if YAML is missing."""
    return {
        'version': 'default',
        'priority': {
            'combined': {
                'values': ['Need both acquisition and sell-off'],
                'points': 20,
                'reason': 'Combined acquisition + divestment priority',
            },
            'single_track': {
                'values': ['Acquire units', 'Sell off units'],
                'points': 10,
                'reason': 'Single-track priority selected',
            },
        },
        'fleet_size': [
            {'min': 150, 'points': 15, 'reason': 'Fleet size >= 150'},
            {'min': 80, 'points': 8, 'reason': 'Fleet size >= 80'},
        ],
        'annual_burden': [
            {'min': 500000, 'points': 20, 'reason': 'High annual burden >= $500K'},
            {'min': 200000, 'points': 12, 'reason': 'Annual burden >= $200K'},
        ],
        'urgency': {
            'keywords': ['urgent', 'asap', 'immediately'],
            'points': 6,
            'reason': 'Urgency signal in message',
        },
        'grades': [
            {'min': 40, 'grade': 'A'},
            {'min': 25, 'grade': 'B'},
        ],
        'default_grade': 'C',
    }


def load_scoring_config():
    """Load scoring config from YAML, with in-memory cache and hardcoded fallback."""
    global _scoring_config
    if _scoring_config is not None:
        return _scoring_config

    config_path = os.path.join(os.path.dirname(__file__), 'scoring_config.yaml')
    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f)
        if not isinstance(loaded, dict):
            raise ValueError('scoring config must be a mapping')
        _scoring_config = loaded
        logger.info("Config loaded from YAML (version=%s)", _scoring_config.get('version', '?'))
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("YAML config not usable (%s), using defaults", e)
        _scoring_config = _default_config()

    return _scoring_config


# ── Input parsing ────────────────────────────────────────────────────────────

def _field(obj: Any, attr: str, key: str) -> Any:
    """Read a value from a model object or its camelCase dict form."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, attr, None)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ''


def parse_fleet_size(raw: Any) -> float:
    """First number in a free-text fleet size ("1,200 trucks" → 1200); 0 if none."""
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return as_number(raw)
    match = _NUMBER_RE.search(_text(raw).replace(',', ''))
    return float(match.group()) if match else 0


def priority_track(priority: Any, config: Dict = None) -> Optional[str]:
    """'combined', 'single_track' or None for a priority string."""
    config = config or load_scoring_config()
    wanted = _text(priority).lower()
    if not wanted:
        return None
    for track in ('combined', 'single_track'):
        values = config.get('priority', {}).get(track, {}).get('values', [])
        if wanted in (str(v).strip().lower() for v in values):
            return track
    return None


def grade_for_score(score: float, config: Dict = None) -> str:
    config = config or load_scoring_config()
    for tier in config.get('grades', []):
        if score >= tier['min']:
            return tier['grade']
    return config.get('default_grade', 'C')


# ── Scoring ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScoreResult:
    score: int
    grade: str
    reasons: List[str] = field(default_factory=list)


def _first_tier(value: float, tiers: List[Dict]) -> Optional[Dict]:
    for tier in tiers:
        if value >= tier['min']:
            return tier
    return None


def score_lead(lead: Any, snapshot: Any = None) -> ScoreResult:
    """
    Score a lead against the latest estimator snapshot for its session.

    Args:
        lead:     Lead model or camelCase dict.
        snapshot: EstimatorSnapshot model, camelCase dict, or None.

    Returns:
        ScoreResult with the total, its grade and the reasons that fired.
    """
    cfg = load_scoring_config()
    score = 0
    reasons = []

    track = priority_track(_field(lead, 'priority', 'priority'), cfg)
    if track:
        rule = cfg['priority'][track]
        score += rule['points']
        reasons.append(rule['reason'])

    fleet = parse_fleet_size(_field(lead, 'fleet_size', 'fleetSize'))
    tier = _first_tier(fleet, cfg.get('fleet_size', []))
    if tier:
        score += tier['points']
        reasons.append(tier['reason'])

    burden = as_number(_field(snapshot, 'annual_burden', 'annualBurden'))
    tier = _first_tier(burden, cfg.get('annual_burden', []))
    if tier:
        score += tier['points']
        reasons.append(tier['reason'])

    message = _text(_field(lead, 'message', 'message')).lower()
    urgency = cfg.get('urgency', {})
    if any(keyword in message for keyword in urgency.get('keywords', [])):
        score += urgency['points']
        reasons.append(urgency['reason'])

    score = max(int(score), 0)
    return ScoreResult(score=score, grade=grade_for_score(score, cfg), reasons=reasons)


def apply_score(lead, snapshot=None) -> ScoreResult:
    """Score a Lead model in place."""
    result = score_lead(lead, snapshot)
    lead.score = result.score
    lead.grade = result.grade
    lead.score_reasons = list(result.reasons)
    return result
