"""
Fatal error kinds raised by the reconciliation pipeline.

Each carries the process exit code the command-line runner reports for it.
Unmatched join keys and an empty filtered table are expected outcomes and
have no exception here.
"""


class PipelineError(Exception):
    """Base class for errors that abort a pipeline run with no output."""

    exit_code = 1


class SchemaMismatchError(PipelineError):
    """A raw source does not have the expected column layout after decoding."""

    exit_code = 1


class ReconciliationCountMismatchError(PipelineError):
    """Observed encoded state identifiers do not match the reference name list."""

    exit_code = 2

    def __init__(self, observed: int, expected: int, detail: str = ""):
        self.observed = observed
        self.expected = expected
        message = (
            f"Found {observed} distinct state codes but {expected} reference state names"
        )
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
