"""Exceptions raised by folkit."""


class NotDefiniteClauseError(Exception):
    def __init__(self, clause):
        super().__init__(f"Expected definite clause, got {clause}")
        self.clause = clause


class NotAPredicateError(Exception):
    def __init__(self, formula):
        super().__init__(f"Expected a single predicate as query, got {formula}")
        self.formula = formula


class QueryNotCompleteError(Exception):
    def __init__(self):
        super().__init__("Query is not yet complete")


class QueryAlreadyExecutedError(Exception):
    def __init__(self):
        super().__init__("Query execution has already begun via a prior execute invocation")


class QueryCancelledError(Exception):
    def __init__(self):
        super().__init__("Query was cancelled")


class NegativeResultExplanationError(Exception):
    def __init__(self):
        super().__init__("Explanation of a negative result (which could be massive) is not supported")


class LabelSetExhaustedError(Exception):
    def __init__(self, label_count):
        super().__init__(f"Label set is exhausted after {label_count} labels")
        self.label_count = label_count
