"""Exceptions raised by the matching core."""


class RecordNotFoundError(Exception):
    """Raised when the subject of a match query does not exist."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind.capitalize()} with ID {record_id} not found")
