from typing import Any
from typing import Dict
from typing import List
from typing import Optional

from .constants import CompositeFilterOperator
from .constants import KEY_PROPERTY
from .filter import BaseFilter
from .filter import CompositeFilter
from .group import Group
from .key import Key
from .order import Order


class Statement:
    """Anything that can be passed to `Datastore.execute()`."""

    def __repr__(self) -> str:
        return str(self.to_repr())

    def to_repr(self, namespace: Optional[str] = None) -> Any:
        raise NotImplementedError


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/runQuery#Query
class Query(Statement):
    """
    A chainable query over entities, eg.::

        query = (Query().kind_of('Employee')
                 .filter_by(Filter.gte('age', 18))
                 .order_by(Order.desc('age'))
                 .limit(10))

    When several filters are given they are combined with `AND`.

    Cursors are the opaque (base64-encoded) strings returned in
    `QueryResult.cursor`.
    """
    # pylint: disable=too-many-instance-attributes

    def __init__(self) -> None:
        self.kinds: List[str] = []
        self.filters: List[BaseFilter] = []
        self.orders: List[Order] = []
        self.groups: List[Group] = []
        self.projection: List[str] = []
        self.start_cursor: Optional[str] = None
        self.end_cursor: Optional[str] = None
        self._offset: Optional[int] = None
        self._limit: Optional[int] = None

    def kind_of(self, kind: str) -> 'Query':
        self.kinds.append(kind)
        return self

    def filter_by(self, query_filter: BaseFilter) -> 'Query':
        self.filters.append(query_filter)
        return self

    def order_by(self, order: Order) -> 'Query':
        self.orders.append(order)
        return self

    def group_by(self, group: Group) -> 'Query':
        self.groups.append(group)
        return self

    def keys_only(self) -> 'Query':
        self.projection.append(KEY_PROPERTY)
        return self

    def properties(self, *names: str) -> 'Query':
        self.projection.extend(names)
        return self

    def from_cursor(self, cursor: str) -> 'Query':
        self.start_cursor = cursor
        return self

    def to_cursor(self, cursor: str) -> 'Query':
        self.end_cursor = cursor
        return self

    def limit(self, limit: int) -> 'Query':
        if limit < 0:
            raise ValueError('limit must not be negative')
        self._limit = limit
        return self

    def offset(self, offset: int) -> 'Query':
        if offset < 0:
            raise ValueError('offset must not be negative')
        self._offset = offset
        return self

    @property
    def query_filter(self) -> Optional[BaseFilter]:
        if not self.filters:
            return None
        if len(self.filters) == 1:
            return self.filters[0]
        return CompositeFilter(self.filters, op=CompositeFilterOperator.AND)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Query):
            return False

        return self.to_repr() == other.to_repr()

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'kind': [{'name': k} for k in self.kinds],
        }
        query_filter = self.query_filter
        if query_filter:
            data['filter'] = query_filter.to_repr(namespace)
        if self.orders:
            data['order'] = [o.to_repr() for o in self.orders]
        if self.projection:
            data['projection'] = [{'property': {'name': p}}
                                  for p in self.projection]
        if self.groups:
            data['distinctOn'] = [g.to_repr() for g in self.groups]
        if self.start_cursor:
            data['startCursor'] = self.start_cursor
        if self.end_cursor:
            data['endCursor'] = self.end_cursor
        if self._offset is not None:
            data['offset'] = self._offset
        if self._limit is not None:
            data['limit'] = self._limit
        return data


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/lookup
class KeyQuery(Statement):
    """Fetch a single entity by key."""

    def __init__(self, key: Key) -> None:
        self.key = key

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, KeyQuery):
            return False

        return self.key == other.key

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        return self.key.to_repr(namespace)
