from datetime import datetime
from typing import Any
from typing import Dict
from typing import Iterator
from typing import List
from typing import Optional
from typing import Type
from typing import Union

from .key import Key
from .lat_lng import LatLng
from .value import Value


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/Entity
class Entity:
    """
    A record stored in Datastore: an optional key plus named property values.

    Entities are immutable; use `Entity.builder()` to construct new instances
    or to derive a modified copy of an existing entity.
    """
    key_kind = Key
    value_kind = Value

    __slots__ = ('_key', '_properties')

    def __init__(self, key: Optional[Key] = None,
                 properties: Optional[Dict[str, Any]] = None) -> None:
        self._key = key
        self._properties: Dict[str, Value] = {
            k: v if isinstance(v, Value) else self.value_kind(v)
            for k, v in (properties or {}).items()
        }

    @classmethod
    def builder(cls, source: Union[None, str, Key, 'Entity'] = None,
                id_or_name: Union[None, int, str] = None) -> 'EntityBuilder':
        """
        Start a new `EntityBuilder`.

        Accepted forms:

        * `Entity.builder()`: no key
        * `Entity.builder(kind)`: a partial key of the given kind
        * `Entity.builder(kind, 1234)` / `Entity.builder(kind, 'name')`
        * `Entity.builder(key)`: the given key
        * `Entity.builder(entity)`: a copy of an existing entity
        """
        if isinstance(source, Entity):
            return EntityBuilder(cls, source.key, source.properties)
        if isinstance(source, Key):
            return EntityBuilder(cls, source)
        if isinstance(source, str):
            return EntityBuilder(
                cls, cls.key_kind.builder(source, id_or_name).build())
        if source is None and id_or_name is None:
            return EntityBuilder(cls)

        raise ValueError('an id or name requires a kind')

    @property
    def key(self) -> Optional[Key]:
        return self._key

    @property
    def properties(self) -> Dict[str, Value]:
        return dict(self._properties)

    def get(self, name: str) -> Optional[Value]:
        return self._properties.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._properties

    def __iter__(self) -> Iterator[str]:
        return iter(self._properties)

    def __len__(self) -> int:
        return len(self._properties)

    def _get(self, name: str) -> Optional[Value]:
        value = self._properties.get(name)
        if value is None or value.is_null:
            return None
        return value

    def get_string(self, name: str) -> Optional[str]:
        value = self._get(name)
        return value.string if value else None

    def get_integer(self, name: str) -> Optional[int]:
        value = self._get(name)
        return value.integer if value else None

    def get_boolean(self, name: str) -> Optional[bool]:
        value = self._get(name)
        return value.boolean if value else None

    def get_double(self, name: str) -> Optional[float]:
        value = self._get(name)
        return value.double if value else None

    def get_date(self, name: str) -> Optional[datetime]:
        value = self._get(name)
        return value.date if value else None

    def get_blob(self, name: str) -> Optional[bytes]:
        value = self._get(name)
        return value.blob if value else None

    def get_entity(self, name: str) -> Optional['Entity']:
        value = self._get(name)
        return value.entity if value else None

    def get_key(self, name: str) -> Optional[Key]:
        value = self._get(name)
        return value.key if value else None

    def get_geo_point(self, name: str) -> Optional[LatLng]:
        value = self._get(name)
        return value.geo_point if value else None

    def get_list(self, name: str,
                 type_: Optional[Type[Any]] = None) -> Optional[List[Any]]:
        """
        Return an array property as a list of `Value`, or, when `type_` is
        given, as a list of values converted to that type.
        """
        value = self._get(name)
        if value is None:
            return None
        if type_ is None:
            return value.list
        return value.get_list(type_)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return False

        return bool(
            self._key == other._key
            and self._properties == other._properties,
        )

    def __hash__(self) -> int:
        return hash((self._key, frozenset(self._properties.items())))

    def __repr__(self) -> str:
        return str(self.to_repr())

    def __str__(self) -> str:
        return '{' + ','.join(f'{k}:{v}'
                              for k, v in self._properties.items()) + '}'

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'Entity':
        # https://cloud.google.com/datastore/docs/reference/data/rest/v1/Entity
        # "for example, an entity in Value.entity_value may have no key"
        if 'key' in data:
            key: Optional[Key] = cls.key_kind.from_repr(data['key'])
        else:
            key = None

        properties = {
            k: cls.value_kind.from_repr(v)
            for k, v in data.get('properties', {}).items()
        }
        return cls(key, properties)

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'properties': {
                k: v.to_repr(namespace)
                for k, v in self._properties.items()
            },
        }
        if self._key is not None:
            data['key'] = self._key.to_repr(namespace)
        return data


class EntityBuilder:
    def __init__(self, entity_kind: Type[Entity] = Entity,
                 key: Optional[Key] = None,
                 properties: Optional[Dict[str, Value]] = None) -> None:
        self._entity_kind = entity_kind
        self._key = key
        self._properties: Dict[str, Value] = dict(properties or {})

    def build(self) -> Entity:
        return self._entity_kind(self._key, self._properties)

    def key(self, key: Key) -> 'EntityBuilder':
        self._key = key
        return self

    def property(self, name: str, value: Any,
                 indexed: Optional[bool] = None) -> 'EntityBuilder':
        """
        Set a property. Raw Python values (and lists of them) are wrapped in
        a `Value`; `indexed` overrides the value's own index flag.
        """
        if isinstance(value, Value) and indexed is None:
            self._properties[name] = value
        else:
            self._properties[name] = self._entity_kind.value_kind(
                value, indexed=indexed)
        return self

    def remove(self, name: str) -> 'EntityBuilder':
        self._properties.pop(name, None)
        return self
