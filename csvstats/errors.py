"""Errors raised by the analyzer and service layer.

Each carries the HTTP status it maps to; `csvstats.main` turns them into
`{"detail": ...}` responses.
"""


class AnalysisError(Exception):
    status_code: int = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class BadRequestError(AnalysisError):
    """Client-supplied CSV failed validation."""

    status_code = 400


class NotFoundError(AnalysisError):
    status_code = 404

    @classmethod
    def for_analysis(cls, analysis_id: int) -> "NotFoundError":
        return cls(f"Analysis with id {analysis_id} not found")
