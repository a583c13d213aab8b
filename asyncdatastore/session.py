from typing import Optional

import aiohttp
from gcloud.aio.auth import AioSession  # pylint: disable=no-name-in-module


class DatastoreSession(AioSession):  # type: ignore[misc,valid-type]
    """
    An `AioSession` whose lazily-created client honours the connection pool
    size and connect timeout from `DatastoreConfig`.

    A session passed in by the caller is shared: it is used as-is and never
    closed here.
    """

    def __init__(
            self, session: Optional[aiohttp.ClientSession] = None,
            timeout: float = 10, connect_timeout: Optional[float] = None,
            max_connections: int = 0, verify_ssl: bool = True,
    ) -> None:
        super().__init__(session, timeout=timeout, verify_ssl=verify_ssl)
        self._connect_timeout = connect_timeout
        self._max_connections = max_connections

    @property
    def session(self) -> aiohttp.ClientSession:
        if not self._session:
            connector = aiohttp.TCPConnector(limit=self._max_connections,
                                             ssl=self._ssl)
            timeout = aiohttp.ClientTimeout(total=self._timeout,
                                            connect=self._connect_timeout)
            self._session = aiohttp.ClientSession(connector=connector,
                                                  timeout=timeout)
        return self._session
