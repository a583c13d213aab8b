from typing import Any
from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional

from .constants import MoreResultsType
from .entity import Entity
from .key import Key


class Result:
    def __repr__(self) -> str:
        return f'{type(self).__name__}({vars(self)})'


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/beginTransaction
class TransactionResult(Result):
    def __init__(self, transaction: str) -> None:
        self.transaction = transaction

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TransactionResult):
            return False

        return self.transaction == other.transaction

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'TransactionResult':
        transaction: str = data['transaction']
        return cls(transaction)


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/rollback
class RollbackResult(Result):
    def __eq__(self, other: Any) -> bool:
        return isinstance(other, RollbackResult)


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/commit
class MutationResult(Result):
    """
    The outcome of a commit.

    `keys` holds the keys Datastore allocated for entities inserted with a
    partial key, in mutation order. `versions` holds the new version of every
    mutated entity.
    """
    key_kind = Key

    def __init__(self, keys: Optional[Iterable[Key]] = None,
                 index_updates: int = 0,
                 versions: Optional[Iterable[str]] = None) -> None:
        self.keys: List[Key] = list(keys or [])
        self.index_updates = index_updates
        self.versions: List[str] = list(versions or [])

    @classmethod
    def empty(cls) -> 'MutationResult':
        return cls()

    @property
    def insert_key(self) -> Optional[Key]:
        return self.keys[0] if self.keys else None

    @property
    def insert_keys(self) -> List[Key]:
        return list(self.keys)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, MutationResult):
            return False

        return bool(
            self.keys == other.keys
            and self.index_updates == other.index_updates
            and self.versions == other.versions)

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'MutationResult':
        results = data.get('mutationResults', [])
        keys = [cls.key_kind.from_repr(r['key'])
                for r in results if 'key' in r]
        versions = [r['version'] for r in results if 'version' in r]
        # proto3 omits zero-valued fields
        index_updates = int(data.get('indexUpdates', 0))
        return cls(keys, index_updates, versions)


class QueryResult(Result):
    """
    The entities returned by a query or lookup.

    `cursor` is the position after the last returned entity; pass it to
    `Query.from_cursor()` to fetch the next page. For lookups, `missing`
    holds the keys which were not found and `deferred` those which Datastore
    did not process and should be requested again.
    """
    entity_kind = Entity
    key_kind = Key

    def __init__(
            self, entities: Optional[Iterable[Entity]] = None,
            cursor: Optional[str] = None,
            more_results: MoreResultsType = MoreResultsType.UNSPECIFIED,
            missing: Iterable[Key] = (),
            deferred: Iterable[Key] = (),
    ) -> None:
        self._entities: List[Entity] = list(entities or [])
        self.cursor = cursor
        self.more_results = more_results
        self.missing: List[Key] = list(missing)
        self.deferred: List[Key] = list(deferred)

    @classmethod
    def empty(cls) -> 'QueryResult':
        return cls()

    @property
    def all(self) -> List[Entity]:
        return list(self._entities)

    @property
    def entity(self) -> Optional[Entity]:
        """The first entity, or `None` if nothing was returned."""
        return self._entities[0] if self._entities else None

    @property
    def has_more(self) -> bool:
        return self.more_results in {
            MoreResultsType.NOT_FINISHED,
            MoreResultsType.MORE_RESULTS_AFTER_LIMIT,
            MoreResultsType.MORE_RESULTS_AFTER_CURSOR,
        }

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, QueryResult):
            return False

        return bool(
            self._entities == other._entities
            and self.cursor == other.cursor
            and self.more_results == other.more_results
            and self.missing == other.missing
            and self.deferred == other.deferred)

    # https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/runQuery#QueryResultBatch
    @classmethod
    def from_batch(cls, data: Dict[str, Any]) -> 'QueryResult':
        entities = [cls.entity_kind.from_repr(r['entity'])
                    for r in data.get('entityResults', [])]
        more_results = MoreResultsType(
            data.get('moreResults', MoreResultsType.UNSPECIFIED.value))
        return cls(entities, cursor=data.get('endCursor') or None,
                   more_results=more_results)

    # https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/lookup#response-body
    @classmethod
    def from_lookup(cls, data: Dict[str, Any]) -> 'QueryResult':
        entities = [cls.entity_kind.from_repr(r['entity'])
                    for r in data.get('found', [])]
        missing = [cls.key_kind.from_repr(r['entity']['key'])
                   for r in data.get('missing', [])]
        deferred = [cls.key_kind.from_repr(k)
                    for k in data.get('deferred', [])]
        return cls(entities, missing=missing, deferred=deferred)


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/allocateIds
class AllocateIdsResult(Result):
    key_kind = Key

    def __init__(self, keys: Optional[Iterable[Key]] = None) -> None:
        self.keys: List[Key] = list(keys or [])

    def __iter__(self) -> Iterator[Key]:
        return iter(self.keys)

    def __len__(self) -> int:
        return len(self.keys)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AllocateIdsResult):
            return False

        return self.keys == other.keys

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'AllocateIdsResult':
        return cls(cls.key_kind.from_repr(k) for k in data.get('keys', []))
