"""
Recommendations — next best action and focus areas for a scored lead.

The outreach draft composer reads the same recommendation so the email an
advisor sends always matches what the advisor view shows.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from leaddesk.models.lead import Lead
from leaddesk.pipeline.scoring import parse_fleet_size

SEGMENTATION_FLEET_SIZE = 150

_PRIORITY_GUIDANCE = {
    'need both acquisition and sell-off': [
        'Run a combined keep/replace/divest workshop in week 1.',
        'Build a phased acquisition + liquidation schedule over 90 days.',
    ],
    'acquire units': [
        'Prioritize specification alignment and total-cost vendor shortlist.',
    ],
    'sell off units': [
        'Start with high-carry-cost and low-utilization units for sell-off.',
    ],
}

_GRADE_CADENCE = {
    'A': 'Route to senior advisor and schedule discovery call within 24 hours.',
    'B': 'Schedule advisor call within 72 hours and send pre-call questionnaire.',
    'C': 'Assign nurture sequence with estimator follow-up and case examples.',
}


@dataclass(frozen=True)
class Recommendation:
    next_best_action: str
    recommendations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            'nextBestAction': self.next_best_action,
            'recommendations': list(self.recommendations),
        }


def recommend_for_lead(lead: Lead) -> Recommendation:
    items = list(_PRIORITY_GUIDANCE.get(lead.priority.strip().lower(), []))

    if parse_fleet_size(lead.fleet_size) >= SEGMENTATION_FLEET_SIZE:
        items.append('Create region-based fleet segmentation to speed decision cycles.')

    items.append(_GRADE_CADENCE.get(lead.grade, _GRADE_CADENCE['C']))

    if lead.grade == 'A':
        action = 'Immediate senior discovery call'
    else:
        action = 'Advisor qualification call'
    return Recommendation(next_best_action=action, recommendations=items)


def compose_outreach_draft(lead: Lead, recommendation: Recommendation) -> Tuple[str, str]:
    """Subject and plain-text body for a first outreach email."""
    subject = f'Fleet Strategy Next Steps for {lead.name}'
    lines = [
        f'Hi {lead.name},',
        '',
        'Thanks for reaching out regarding your fleet strategy priorities.',
        f'Based on your request ({lead.priority}) and profile, our suggested first move is: '
        f'{recommendation.next_best_action}.',
        '',
        'Proposed immediate focus areas:',
    ]
    lines += [f'{idx}. {item}' for idx, item in enumerate(recommendation.recommendations, 1)]
    lines += [
        '',
        'Would you be available for a 30-minute strategy call this week?',
        '',
        'Best,',
        'Fleet Advisory Group',
    ]
    return subject, '\n'.join(lines)
