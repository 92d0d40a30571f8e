class SettlementError(Exception):
    pass


class InvalidExpenseData(SettlementError):
    pass


class SplitMismatch(SettlementError):
    pass


class DegenerateSplit(SettlementError):
    pass
