from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional

from .constants import CompositeFilterOperator
from .constants import KEY_PROPERTY
from .constants import PropertyFilterOperator
from .key import Key
from .value import Value


class BaseFilter:
    json_key: str

    def __repr__(self) -> str:
        return str(self.to_repr())

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'BaseFilter':
        if CompositeFilter.json_key in data:
            return CompositeFilter.from_repr(data)
        if Filter.json_key in data:
            return Filter.from_repr(data)

        raise ValueError(f'invalid filter name: {list(data.keys())}')

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        raise NotImplementedError


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/runQuery#PropertyFilter
class Filter(BaseFilter):
    """
    A single property comparison, eg. `Filter.gte('age', 18)`.

    Raw Python values are wrapped in a `Value`; lists are sent as array values.
    """
    json_key = 'propertyFilter'
    value_kind = Value

    def __init__(self, name: str, op: PropertyFilterOperator,
                 value: Any) -> None:
        self.name = name
        self.op = op
        self.value: Value = (value if isinstance(value, Value)
                             else self.value_kind(value))

    @classmethod
    def eq(cls, name: str, value: Any) -> 'Filter':
        return cls(name, PropertyFilterOperator.EQUAL, value)

    @classmethod
    def lt(cls, name: str, value: Any) -> 'Filter':
        return cls(name, PropertyFilterOperator.LESS_THAN, value)

    @classmethod
    def lte(cls, name: str, value: Any) -> 'Filter':
        return cls(name, PropertyFilterOperator.LESS_THAN_OR_EQUAL, value)

    @classmethod
    def gt(cls, name: str, value: Any) -> 'Filter':
        return cls(name, PropertyFilterOperator.GREATER_THAN, value)

    @classmethod
    def gte(cls, name: str, value: Any) -> 'Filter':
        return cls(name, PropertyFilterOperator.GREATER_THAN_OR_EQUAL, value)

    @classmethod
    def ancestor(cls, key: Key) -> 'Filter':
        return cls(KEY_PROPERTY, PropertyFilterOperator.HAS_ANCESTOR, key)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Filter):
            return False

        return bool(
            self.name == other.name
            and self.op == other.op
            and self.value == other.value)

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'Filter':
        data = data.get(cls.json_key, data)
        name = data['property']['name']
        op = PropertyFilterOperator(data['op'])
        value = cls.value_kind.from_repr(data['value'])
        return cls(name, op, value)

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        return {
            self.json_key: {
                'op': self.op.value,
                'property': {'name': self.name},
                'value': self.value.to_repr(namespace),
            },
        }


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/runQuery#CompositeFilter
class CompositeFilter(BaseFilter):
    json_key = 'compositeFilter'

    def __init__(
            self, filters: Iterable[BaseFilter],
            op: CompositeFilterOperator = CompositeFilterOperator.AND,
    ) -> None:
        self.filters: List[BaseFilter] = list(filters)
        self.op = op

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CompositeFilter):
            return False

        return self.op == other.op and self.filters == other.filters

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'CompositeFilter':
        data = data.get(cls.json_key, data)
        op = CompositeFilterOperator(data['op'])
        filters = [BaseFilter.from_repr(f) for f in data.get('filters', [])]
        return cls(filters, op=op)

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        return {
            self.json_key: {
                'op': self.op.value,
                'filters': [f.to_repr(namespace) for f in self.filters],
            },
        }
