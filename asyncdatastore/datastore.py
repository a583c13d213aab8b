import asyncio
import json
import logging
import os
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Sequence
from typing import Union

import aiohttp
import backoff
from gcloud.aio.auth import Token  # pylint: disable=no-name-in-module

from .allocate_ids import AllocateIds
from .config import DatastoreConfig
from .constants import Mode
from .constants import SCOPES
from .exceptions import DatastoreException
from .mutation import Batch
from .mutation import MutationStatement
from .query import KeyQuery
from .query import Query
from .result import AllocateIdsResult
from .result import MutationResult
from .result import QueryResult
from .result import RollbackResult
from .result import TransactionResult
from .session import DatastoreSession
from .transaction_options import TransactionOptions


log = logging.getLogger(__name__)

Transaction = Union[str, TransactionResult]


def _is_permanent(e: Exception) -> bool:
    # only throttling and server-side errors are worth retrying
    if isinstance(e, aiohttp.ClientResponseError):
        return e.status != 429 and e.status < 500
    return False


def _transaction_id(transaction: Optional[Transaction]) -> Optional[str]:
    if isinstance(transaction, TransactionResult):
        return transaction.transaction
    return transaction


class Datastore:
    """
    An asynchronous client for the Datastore v1 API.

    Every call is retried on connection errors, timeouts, HTTP 429 and HTTP
    5xx, up to `request_retry` attempts in total. Any failure that remains is
    raised as a `DatastoreException`.
    """
    allocate_ids_result_kind = AllocateIdsResult
    mutation_result_kind = MutationResult
    query_result_kind = QueryResult
    transaction_result_kind = TransactionResult

    def __init__(self, config: Optional[DatastoreConfig] = None,
                 session: Optional[aiohttp.ClientSession] = None,
                 **overrides: Any) -> None:
        config = config or DatastoreConfig()
        if overrides:
            config = config.replace(**overrides)
        self.config = config

        self.session = DatastoreSession(
            session, timeout=config.request_timeout,
            connect_timeout=config.connect_timeout,
            max_connections=config.max_connections)
        self._token: Optional[Token] = config.token

        self._project = config.project
        if config.api_is_dev and not self._project:
            self._project = (
                os.environ.get('DATASTORE_PROJECT_ID')
                or os.environ.get('GOOGLE_CLOUD_PROJECT')
                or 'dev'
            )

    @property
    def token(self) -> Token:
        # created on first use, so that the shared HTTP session is only opened
        # from within a running event loop
        if self._token is None:
            self._token = Token(service_file=self.config.service_file,
                                scopes=SCOPES,
                                session=self.session.session)
        return self._token

    async def project(self) -> str:
        if self._project:
            return self._project

        self._project = await self.token.get_project()
        if self._project:
            return self._project

        raise DatastoreException('could not determine project, please set it '
                                 'manually')

    async def headers(self) -> Dict[str, str]:
        if self.config.api_is_dev:
            return {}

        token = await self.token.get()
        return {
            'Authorization': f'Bearer {token}',
        }

    async def _request(self, method: str,
                       body: Dict[str, Any]) -> Dict[str, Any]:
        project = await self.project()
        url = f'{self.config.api_root}/projects/{project}:{method}'

        payload = json.dumps(body).encode('utf-8')
        headers = await self.headers()
        headers.update({
            'Content-Length': str(len(payload)),
            'Content-Type': 'application/json',
        })
        timeout = aiohttp.ClientTimeout(total=self.config.request_timeout,
                                        connect=self.config.connect_timeout)

        @backoff.on_exception(backoff.expo,
                              (aiohttp.ClientError, asyncio.TimeoutError),
                              max_tries=self.config.request_retry,
                              giveup=_is_permanent, logger=log)
        async def post() -> Dict[str, Any]:
            resp = await self.session.post(url, headers=headers,
                                           data=payload, timeout=timeout)
            data: Dict[str, Any] = await resp.json()
            return data

        log.debug('calling %s on project %s', method, project)
        try:
            return await post()
        except aiohttp.ClientResponseError as e:
            raise DatastoreException(f'{method} failed: {e.message}',
                                     status_code=e.status) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DatastoreException(f'{method} failed: {e!r}') from e

    def _namespace(self, namespace: Optional[str]) -> Optional[str]:
        return namespace if namespace is not None else self.config.namespace

    @staticmethod
    def _read_options(transaction: Optional[str]) -> Dict[str, Any]:
        if transaction:
            return {'readOptions': {'transaction': transaction}}
        return {}

    # https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/beginTransaction
    async def transaction(
            self, options: Optional[TransactionOptions] = None,
    ) -> TransactionResult:
        body: Dict[str, Any] = {}
        if options is not None:
            body['transactionOptions'] = options.to_repr()

        data = await self._request('beginTransaction', body)
        return self.transaction_result_kind.from_repr(data)

    # https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/rollback
    async def rollback(self, transaction: Transaction) -> RollbackResult:
        await self._request('rollback',
                            {'transaction': _transaction_id(transaction)})
        return RollbackResult()

    async def commit(self, transaction: Transaction) -> MutationResult:
        """Commit a transaction without adding any further mutations."""
        return await self._commit([], _transaction_id(transaction))

    # https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/commit
    async def _commit(self, mutations: List[Dict[str, Any]],
                      transaction: Optional[str]) -> MutationResult:
        body: Dict[str, Any] = {'mutations': mutations}
        if transaction:
            body['mode'] = Mode.TRANSACTIONAL.value
            body['transaction'] = transaction
        else:
            body['mode'] = Mode.NON_TRANSACTIONAL.value

        data = await self._request('commit', body)
        return self.mutation_result_kind.from_repr(data)

    # https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/lookup
    async def _lookup(self, queries: Sequence[KeyQuery],
                      transaction: Optional[str],
                      namespace: Optional[str]) -> QueryResult:
        body: Dict[str, Any] = {
            'keys': [q.to_repr(namespace) for q in queries],
        }
        body.update(self._read_options(transaction))

        data = await self._request('lookup', body)
        return self.query_result_kind.from_lookup(data)

    # https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/runQuery
    async def _run_query(self, query: Query, transaction: Optional[str],
                         namespace: Optional[str]) -> QueryResult:
        body: Dict[str, Any] = {
            'partitionId': {
                'projectId': await self.project(),
                'namespaceId': namespace or '',
            },
            'query': query.to_repr(namespace),
        }
        body.update(self._read_options(transaction))

        data = await self._request('runQuery', body)
        return self.query_result_kind.from_batch(data.get('batch', {}))

    # https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/allocateIds
    async def _allocate_ids(self, statement: AllocateIds,
                            namespace: Optional[str]) -> AllocateIdsResult:
        data = await self._request('allocateIds',
                                   {'keys': statement.to_repr(namespace)})
        return self.allocate_ids_result_kind.from_repr(data)

    async def execute(
            self, statement: Any,
            transaction: Optional[Transaction] = None,
            namespace: Optional[str] = None,
    ) -> Union[AllocateIdsResult, MutationResult, QueryResult]:
        """
        Run a statement, optionally within a transaction.

        * `AllocateIds` returns an `AllocateIdsResult`
        * a `KeyQuery`, or a list of them, returns a `QueryResult`
        * a `Query` returns a `QueryResult`
        * a mutation, a list of mutations, or a `Batch` returns a
          `MutationResult`

        `namespace` overrides the configured namespace for every key in the
        request. Without a transaction, mutations are committed
        non-transactionally.
        """
        txn = _transaction_id(transaction)
        ns = self._namespace(namespace)

        if isinstance(statement, (list, tuple)):
            if not statement:
                raise ValueError('cannot execute an empty list of statements')
            if all(isinstance(s, KeyQuery) for s in statement):
                return await self._lookup(statement, txn, ns)
            if all(isinstance(s, MutationStatement) for s in statement):
                return await self._commit([s.to_repr(ns) for s in statement],
                                          txn)
            raise TypeError('a list of statements must hold only KeyQuery or '
                            'only mutation statements')

        if isinstance(statement, AllocateIds):
            return await self._allocate_ids(statement, ns)
        if isinstance(statement, KeyQuery):
            return await self._lookup([statement], txn, ns)
        if isinstance(statement, MutationStatement):
            return await self._commit([statement.to_repr(ns)], txn)
        if isinstance(statement, Batch):
            return await self._commit(statement.to_repr(ns), txn)
        if isinstance(statement, Query):
            return await self._run_query(statement, txn, ns)

        raise TypeError(f'cannot execute {type(statement).__name__}')

    async def close(self) -> None:
        await self.session.close()

    async def __aenter__(self) -> 'Datastore':
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
