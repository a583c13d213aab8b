import os
from typing import Any
from typing import AnyStr
from typing import IO
from typing import Optional
from typing import Tuple
from typing import Union

from gcloud.aio.auth import Token  # pylint: disable=no-name-in-module

from .constants import DEFAULT_CONNECT_TIMEOUT
from .constants import DEFAULT_HOST
from .constants import DEFAULT_MAX_CONNECTIONS
from .constants import DEFAULT_REQUEST_RETRY
from .constants import DEFAULT_REQUEST_TIMEOUT
from .constants import DEFAULT_VERSION


def init_api_root(host: Optional[str], version: str,
                  api_is_dev: Optional[bool]) -> Tuple[bool, str]:
    host = host.rstrip('/') if host else host
    if host and host != DEFAULT_HOST:
        is_dev = True if api_is_dev is None else api_is_dev
        return is_dev, f'{host}/{version}'

    emulator = os.environ.get('DATASTORE_EMULATOR_HOST')
    if emulator and not host:
        is_dev = True if api_is_dev is None else api_is_dev
        return is_dev, f'http://{emulator}/{version}'

    return bool(api_is_dev), f'{DEFAULT_HOST}/{version}'


class DatastoreConfig:
    """
    Settings used to initialise a `Datastore`.

    Any option not provided falls back to a default. Timeouts are in seconds;
    `max_connections=0` leaves the connection pool unbounded.
    """
    # pylint: disable=too-many-instance-attributes

    def __init__(
            self, project: Optional[str] = None,
            namespace: Optional[str] = None,
            service_file: Optional[Union[str, IO[AnyStr]]] = None,
            token: Optional[Token] = None,
            connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
            max_connections: int = DEFAULT_MAX_CONNECTIONS,
            request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
            request_retry: int = DEFAULT_REQUEST_RETRY,
            host: Optional[str] = None, version: str = DEFAULT_VERSION,
            api_is_dev: Optional[bool] = None,
    ) -> None:
        if request_retry < 1:
            raise ValueError('request_retry must allow at least one attempt')
        if max_connections < 0:
            raise ValueError('max_connections must not be negative')

        self.project = project
        self.namespace = namespace
        self.service_file = service_file
        self.token = token
        self.connect_timeout = connect_timeout
        self.max_connections = max_connections
        self.request_timeout = request_timeout
        self.request_retry = request_retry
        self.host = host
        self.version = version
        self._api_is_dev = api_is_dev

        self.api_is_dev, self.api_root = init_api_root(host, version,
                                                       api_is_dev)

    def __repr__(self) -> str:
        return (f'DatastoreConfig(project={self.project!r}, '
                f'namespace={self.namespace!r}, '
                f'api_root={self.api_root!r})')

    def replace(self, **overrides: Any) -> 'DatastoreConfig':
        fields = {
            'project': self.project,
            'namespace': self.namespace,
            'service_file': self.service_file,
            'token': self.token,
            'connect_timeout': self.connect_timeout,
            'max_connections': self.max_connections,
            'request_timeout': self.request_timeout,
            'request_retry': self.request_retry,
            'host': self.host,
            'version': self.version,
            'api_is_dev': self._api_is_dev,
        }
        unknown = set(overrides) - set(fields)
        if unknown:
            raise TypeError(f'unknown config option(s): {sorted(unknown)}')

        fields.update(overrides)
        return DatastoreConfig(**fields)
