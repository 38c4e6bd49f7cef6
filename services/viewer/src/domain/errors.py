class ViewerError(Exception):
    """Base error for the metrics viewer."""


class MetricsFetchError(ViewerError):
    """A metrics read failed; the caller keeps its previous samples."""

    def __init__(self, agent_id: str, reason: str, status_code: int | None = None):
        super().__init__(f"metrics fetch for {agent_id} failed: {reason}")
        self.agent_id = agent_id
        self.reason = reason
        self.status_code = status_code


class ViewNotFoundError(ViewerError):
    def __init__(self, view_id: str):
        super().__init__(f"unknown view {view_id}")
        self.view_id = view_id
