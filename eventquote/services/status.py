from eventquote.core.enums import QuotationStatus
from eventquote.core.errors import AuthorizationError, DomainError

ALLOWED_TRANSITIONS = {
    QuotationStatus.DRAFT: {QuotationStatus.REVIEW},
    QuotationStatus.REVIEW: {QuotationStatus.DRAFT, QuotationStatus.APPROVED, QuotationStatus.REJECTED},
    QuotationStatus.APPROVED: set(),
    QuotationStatus.REJECTED: set(),
}

TERMINAL_STATUSES = {QuotationStatus.APPROVED, QuotationStatus.REJECTED}


def check_transition(current: QuotationStatus, target: QuotationStatus, is_admin: bool) -> None:
    """Raise unless ``current -> target`` is permitted for the caller.

    Administrators may move a quotation between any statuses, including out
    of a terminal one.
    """
    if current == target or is_admin:
        return
    if current in TERMINAL_STATUSES:
        raise AuthorizationError(
            f"Only an administrator can change a quotation that is {current.value}"
        )
    if target not in ALLOWED_TRANSITIONS[current]:
        raise DomainError(f"Cannot move a quotation from {current.value} to {target.value}")


INITIAL_STATUSES = {QuotationStatus.DRAFT, QuotationStatus.REVIEW}


def check_initial_status(status: QuotationStatus, is_admin: bool) -> None:
    """New quotations start in DRAFT or REVIEW unless an administrator creates them."""
    if is_admin or status in INITIAL_STATUSES:
        return
    raise AuthorizationError(f"Only an administrator can create a quotation that is {status.value}")
