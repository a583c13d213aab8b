from typing import Optional


class DatastoreException(Exception):
    """
    Raised for any failed Datastore request.

    Errors returned by the API carry their HTTP status in `status_code`;
    connection-level failures leave it as `None`. The underlying exception is
    always available as `__cause__`.
    """

    def __init__(self, message: str,
                 status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
