"""Recommended retention actions built from aggregate risk and ledger state"""

from typing import List, Optional, Sequence
from retention_engine.domain.models import ActionType, ClientRef, PreviewEntry, RecommendedAction
from retention_engine.utils.numbers import finite_or_zero, pluralize

DEFAULT_PREVIEW_LIMIT = 3

# Lower value wins a tie on count
ACTION_PRIORITY = {action_type: rank for rank, action_type in enumerate(ActionType)}


def _risk_percent(client: ClientRef) -> int:
    """Whole risk percent; missing, NaN or infinite values count as 0"""
    return int(round(finite_or_zero(client.risk_percent)))


def _preview_meta(client: ClientRef) -> Optional[str]:
    return f"{_risk_percent(client)}% risk" if client.risk_percent is not None else None


def _member_action(
    action_type: ActionType,
    label: str,
    sublabel: str,
    clients: Sequence[ClientRef],
    preview_limit: int,
) -> RecommendedAction:
    return RecommendedAction(
        id=action_type.value,
        type=action_type,
        label=label,
        count=len(clients),
        sublabel=sublabel,
        client_ids=[c.id for c in clients],
        preview=[PreviewEntry(name=c.full_name, meta=_preview_meta(c)) for c in clients[:preview_limit]],
    )


def rank_risk_clients(risk_clients: Sequence[ClientRef]) -> List[ClientRef]:
    """Highest risk first; sorted() is stable so equal percents keep input order"""
    return sorted(risk_clients, key=lambda c: -_risk_percent(c))


def recommend_actions(
    risk_clients: Sequence[ClientRef],
    unpaid_clients: Sequence[ClientRef],
    expiring_count: int,
    preview_limit: int = DEFAULT_PREVIEW_LIMIT,
) -> List[RecommendedAction]:
    """
    Build the ranked list of recommended actions.

    Candidates (each emitted only when its count is above zero):
    - send_reminder: at-risk members, highest risk first
    - follow_up_payment: members with outstanding balances, in given order
    - offer_discount: renewal incentive sized by the expiring count, no member preview

    Result is ordered by count descending; ties follow ActionType declaration order.
    """
    preview_limit = max(0, preview_limit)
    actions: List[RecommendedAction] = []

    ranked = rank_risk_clients(risk_clients)
    if ranked:
        actions.append(
            _member_action(
                ActionType.SEND_REMINDER,
                label="Send renewal reminder",
                sublabel=f"{pluralize(len(ranked), 'at-risk member')} expiring soon",
                clients=ranked,
                preview_limit=preview_limit,
            )
        )

    unpaid = list(unpaid_clients)
    if unpaid:
        actions.append(
            _member_action(
                ActionType.FOLLOW_UP_PAYMENT,
                label="Follow up on outstanding balances",
                sublabel=f"{pluralize(len(unpaid), 'member')} with pending dues",
                clients=unpaid,
                preview_limit=preview_limit,
            )
        )

    expiring = int(finite_or_zero(expiring_count))
    if expiring > 0:
        actions.append(
            RecommendedAction(
                id=ActionType.OFFER_DISCOUNT.value,
                type=ActionType.OFFER_DISCOUNT,
                label="Offer a renewal discount",
                count=expiring,
                sublabel=f"{pluralize(expiring, 'member')} expiring soon",
            )
        )

    return sorted(actions, key=lambda a: (-a.count, ACTION_PRIORITY[a.type]))
