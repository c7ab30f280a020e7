"""Typed failures raised by the ledger and budget services.

Each error carries the HTTP status the API layer answers with; the
services themselves never build HTTP responses.
"""


class LedgerError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SplitMismatchError(LedgerError):
    pass


class InvalidPayerError(LedgerError):
    pass


class UnknownMemberError(LedgerError):
    def __init__(self, member_id, group_id=None):
        where = f" of group {group_id}" if group_id is not None else ""
        super().__init__(f"Member {member_id} is not a member{where}")
        self.member_id = member_id
        self.group_id = group_id


class SelfSettlementError(LedgerError):
    pass


class DuplicateBudgetError(LedgerError):
    status_code = 409

    def __init__(self, category: str, month: str):
        super().__init__(f"A budget for {category!r} in {month} already exists")
        self.category = category
        self.month = month
