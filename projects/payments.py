"""
Payment summary of a project's milestones.

Milestones in progress or under review have received the advance
percentage of their budget; paid milestones have received all of it.
"""

import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .flow_states import MilestoneFlow, flow_milestone_state

ADVANCE_PAID_FLOWS = frozenset({
    MilestoneFlow.MILESTONE_IN_PROGRESS,
    MilestoneFlow.WAITING_CLIENT_ACCEPT_SUBMISSION,
    MilestoneFlow.MILESTONE_COMPLETED,
    MilestoneFlow.SUBMISSION_REJECTED_BY_CLIENT,
})

FULLY_PAID_FLOWS = frozenset({MilestoneFlow.PAID})

ZERO_PAID_FLOWS = frozenset({
    MilestoneFlow.CREATING_MILESTONE,
    MilestoneFlow.WAITING_DEVELOPER_ASSIGNATION,
})

CENT = Decimal('0.01')

LEADING_NUMBER = re.compile(r'^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def round2(value) -> Decimal:
    """Round half-up to cents."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def parse_budget(value) -> Decimal:
    """
    Milestone budget as a Decimal read from the leading number of the value.

    ``'12abc'`` counts as 12. Missing budgets, and values that do not start
    with a finite number (including ``Infinity``), count as zero.
    """
    if value is None or isinstance(value, bool):
        return Decimal(0)
    match = LEADING_NUMBER.match(str(value).strip())
    if match is None:
        return Decimal(0)
    try:
        return Decimal(match.group(0))
    except InvalidOperation:
        return Decimal(0)


def is_zero_paid(milestone) -> bool:
    return flow_milestone_state(milestone) in ZERO_PAID_FLOWS


def is_advance_paid(milestone) -> bool:
    return flow_milestone_state(milestone) in ADVANCE_PAID_FLOWS


def is_fully_paid(milestone) -> bool:
    return flow_milestone_state(milestone) in FULLY_PAID_FLOWS


@dataclass(frozen=True)
class PaymentSummary:
    total_budget_funded: Decimal
    payment_in_advanced: Decimal
    payment_for_completed: Decimal
    funds_remaining: Decimal
    awaiting_payment_count: int
    paid_count: int

    def as_dict(self):
        return {key: (str(value) if isinstance(value, Decimal) else value)
                for key, value in asdict(self).items()}


def _milestones_of(project):
    if isinstance(project, Mapping):
        return project.get('milestones') or []
    return project.milestones.all()


def _budget_of(milestone):
    if isinstance(milestone, Mapping):
        return milestone.get('budget')
    return milestone.budget


def compute_project_payment_summary(project, advance_payment_percentage) -> PaymentSummary:
    """
    Summarize how much of a project's budget has been paid out.

    ``awaiting_payment_count`` counts advance-paid milestones, which still
    owe the remainder of their budget.
    """
    pct = parse_budget(advance_payment_percentage)

    total = Decimal(0)
    advance_base = Decimal(0)
    completed = Decimal(0)
    awaiting_count = 0
    paid_count = 0

    for milestone in _milestones_of(project):
        budget = parse_budget(_budget_of(milestone))
        total += budget
        if is_advance_paid(milestone):
            advance_base += budget
            awaiting_count += 1
        elif is_fully_paid(milestone):
            completed += budget
            paid_count += 1

    total_budget_funded = round2(total)
    payment_in_advanced = round2(advance_base * pct / 100)
    payment_for_completed = round2(completed)

    return PaymentSummary(
        total_budget_funded=total_budget_funded,
        payment_in_advanced=payment_in_advanced,
        payment_for_completed=payment_for_completed,
        funds_remaining=round2(total_budget_funded - payment_in_advanced - payment_for_completed),
        awaiting_payment_count=awaiting_count,
        paid_count=paid_count,
    )
