class ReportError(Exception):
    """Domain-specific exception surfaced to the HTTP caller as a JSON error."""

    def __init__(self, msg: str, *, status_code: int = 500) -> None:
        super().__init__(msg)
        self.status_code = status_code

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.args[0]


__all__ = ["ReportError"]
