import base64
import math
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Callable
from typing import Dict
from typing import List
from typing import Optional
from typing import Tuple
from typing import Type
from typing import TYPE_CHECKING

from .constants import TypeName
from .key import Key
from .lat_lng import LatLng

if TYPE_CHECKING:
    from .entity import Entity  # pylint: disable=cyclic-import


_MISSING = object()


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/runQuery#value
class Value:
    """
    A typed entity property value.

    Values are immutable. The wire type is inferred from the Python type of
    the wrapped value; lists become array values whose items are themselves
    `Value` instances.
    """
    key_kind = Key

    __slots__ = ('_type', '_value', '_indexed')

    def __init__(self, value: Any = None,
                 indexed: Optional[bool] = None) -> None:
        self._type: TypeName
        self._value: Any
        if isinstance(value, Value):
            self._type = value.type_name
            self._value = value._value  # pylint: disable=protected-access
            if indexed is None:
                indexed = value.indexed
            elif self._type == TypeName.ARRAY:
                self._value = tuple(self._array_item(v, indexed)
                                    for v in self._value)
        else:
            self._type, self._value = self._coerce(value, indexed)

        if self._type == TypeName.ARRAY:
            # an explicit flag applies to every item; the array itself is
            # indexed exactly when all of its items are
            indexed = all(v.indexed for v in self._value)
        elif indexed is None:
            # embedded entities are not indexed unless explicitly requested
            indexed = self._type != TypeName.ENTITY
        self._indexed = indexed

    @classmethod
    def builder(cls, value: Any = _MISSING) -> 'ValueBuilder':
        builder = ValueBuilder(cls)
        if value is not _MISSING:
            builder.value(value)
        return builder

    @classmethod
    def _coerce(cls, value: Any,
                indexed: Optional[bool]) -> Tuple[TypeName, Any]:
        # pylint: disable=import-outside-toplevel,cyclic-import
        from .entity import Entity

        # N.B. bool must be checked before int, since it is a subclass
        if value is None:
            return TypeName.NULL, None
        if isinstance(value, bool):
            return TypeName.BOOLEAN, value
        if isinstance(value, int):
            return TypeName.INTEGER, value
        if isinstance(value, float):
            return TypeName.DOUBLE, value
        if isinstance(value, str):
            return TypeName.STRING, value
        if isinstance(value, (bytes, bytearray)):
            return TypeName.BLOB, bytes(value)
        if isinstance(value, datetime):
            return TypeName.TIMESTAMP, value
        if isinstance(value, cls.key_kind):
            return TypeName.KEY, value
        if isinstance(value, Entity):
            return TypeName.ENTITY, value
        if isinstance(value, LatLng):
            return TypeName.GEOPOINT, value
        if isinstance(value, (list, tuple)):
            items = tuple(cls._array_item(v, indexed) for v in value)
            return TypeName.ARRAY, items

        raise ValueError(f'{type(value).__name__} is not a supported value '
                         f'type')

    @classmethod
    def _array_item(cls, item: Any, indexed: Optional[bool]) -> 'Value':
        element = cls(item, indexed)
        if element.is_list:
            raise ValueError('array values cannot contain other arrays')
        return element

    @property
    def type_name(self) -> TypeName:
        return self._type

    @property
    def indexed(self) -> bool:
        return self._indexed

    @property
    def value(self) -> Any:
        """The wrapped value as a plain Python object."""
        if self._type == TypeName.ARRAY:
            return [v.value for v in self._value]
        return self._value

    def _get(self, type_name: TypeName, description: str) -> Any:
        if self._type != type_name:
            raise ValueError(f'Value does not contain {description}.')
        return self._value

    @property
    def string(self) -> str:
        return self._get(TypeName.STRING, 'a string')

    @property
    def integer(self) -> int:
        return self._get(TypeName.INTEGER, 'an integer')

    @property
    def boolean(self) -> bool:
        return self._get(TypeName.BOOLEAN, 'a boolean')

    @property
    def double(self) -> float:
        return self._get(TypeName.DOUBLE, 'a double')

    @property
    def date(self) -> datetime:
        return self._get(TypeName.TIMESTAMP, 'a timestamp')

    @property
    def blob(self) -> bytes:
        return self._get(TypeName.BLOB, 'a blob')

    @property
    def entity(self) -> 'Entity':
        return self._get(TypeName.ENTITY, 'an entity')

    @property
    def key(self) -> Key:
        return self._get(TypeName.KEY, 'a key')

    @property
    def geo_point(self) -> LatLng:
        return self._get(TypeName.GEOPOINT, 'a geo point')

    @property
    def list(self) -> List['Value']:
        """The array items, or an empty list if this is not an array."""
        if self._type != TypeName.ARRAY:
            return []
        return list(self._value)

    @property
    def is_string(self) -> bool:
        return self._type == TypeName.STRING

    @property
    def is_integer(self) -> bool:
        return self._type == TypeName.INTEGER

    @property
    def is_boolean(self) -> bool:
        return self._type == TypeName.BOOLEAN

    @property
    def is_double(self) -> bool:
        return self._type == TypeName.DOUBLE

    @property
    def is_date(self) -> bool:
        return self._type == TypeName.TIMESTAMP

    @property
    def is_blob(self) -> bool:
        return self._type == TypeName.BLOB

    @property
    def is_entity(self) -> bool:
        return self._type == TypeName.ENTITY

    @property
    def is_key(self) -> bool:
        return self._type == TypeName.KEY

    @property
    def is_geo_point(self) -> bool:
        return self._type == TypeName.GEOPOINT

    @property
    def is_list(self) -> bool:
        """Empty arrays are still lists."""
        return self._type == TypeName.ARRAY

    @property
    def is_null(self) -> bool:
        return self._type == TypeName.NULL

    def get_list(self, type_: Type[Any]) -> List[Any]:
        """Return the array items converted through the accessor for type_."""
        if self._type != TypeName.ARRAY:
            raise ValueError('Value does not contain a list.')

        accessor = self._accessor(type_)
        return [accessor(v) for v in self._value]

    @classmethod
    def _accessor(cls, type_: Type[Any]) -> Callable[['Value'], Any]:
        # pylint: disable=import-outside-toplevel,cyclic-import
        from .entity import Entity

        accessors: Dict[Any, Callable[['Value'], Any]] = {
            str: lambda v: v.string,
            int: lambda v: v.integer,
            float: lambda v: v.double,
            bool: lambda v: v.boolean,
            datetime: lambda v: v.date,
            bytes: lambda v: v.blob,
            Entity: lambda v: v.entity,
            LatLng: lambda v: v.geo_point,
            cls.key_kind: lambda v: v.key,
            Value: lambda v: v,
        }
        try:
            return accessors[type_]
        except KeyError:
            raise ValueError(  # pylint: disable=raise-missing-from
                f'Unrecognised value type {type_}.')

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return False

        return bool(
            self._type == other._type
            and self._indexed == other._indexed
            and self._value == other._value)

    def __hash__(self) -> int:
        return hash((self._type, self._value, self._indexed))

    def __repr__(self) -> str:
        return str(self.to_repr())

    def __str__(self) -> str:
        if self._type == TypeName.NULL:
            return '<null>'
        if self._type == TypeName.BLOB:
            return '<binary>'
        if self._type == TypeName.TIMESTAMP:
            return self._value.isoformat()
        if self._type == TypeName.ARRAY:
            return '[' + ','.join(str(v) for v in self._value) + ']'
        return str(self._value)

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'Value':
        # pylint: disable=import-outside-toplevel,cyclic-import
        from .entity import Entity

        for type_name in TypeName:
            if type_name.value in data:
                raw = data[type_name.value]
                break
        else:
            supported = [name.value for name in TypeName]
            raise NotImplementedError(
                f'{list(data.keys())} does not contain a supported value '
                f'type (any of: {supported})')

        value: Any
        if type_name == TypeName.NULL:
            value = None
        elif type_name == TypeName.BOOLEAN:
            value = bool(raw)
        elif type_name == TypeName.INTEGER:
            value = int(raw)
        elif type_name == TypeName.DOUBLE:
            value = float(raw)
        elif type_name == TypeName.STRING:
            value = str(raw)
        elif type_name == TypeName.BLOB:
            value = base64.b64decode(raw)
        elif type_name == TypeName.TIMESTAMP:
            value = parse_timestamp(raw)
        elif type_name == TypeName.KEY:
            value = cls.key_kind.from_repr(raw)
        elif type_name == TypeName.ENTITY:
            value = Entity.from_repr(raw)
        elif type_name == TypeName.GEOPOINT:
            value = LatLng.from_repr(raw)
        else:
            value = [cls.from_repr(v) for v in raw.get('values', [])]

        # Google may not populate that field. This can happen with both
        # indexed and non-indexed fields. Arrays carry it on their items.
        indexed: Optional[bool] = not data.get('excludeFromIndexes', False)
        if type_name == TypeName.ARRAY and 'excludeFromIndexes' not in data:
            indexed = None
        return cls(value, indexed=indexed)

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        """
        Serialize to a wire value.

        A non-`None` `namespace` replaces the namespace of any key held by
        this value, including keys nested in arrays and embedded entities.
        """
        if self._type == TypeName.ARRAY:
            # a Value holding an array must not set excludeFromIndexes: the
            # flag is carried by each of its items instead
            return {
                TypeName.ARRAY.value: {
                    'values': [v.to_repr(namespace) for v in self._value],
                },
            }

        value: Any
        if self._type == TypeName.NULL:
            value = 'NULL_VALUE'
        elif self._type == TypeName.INTEGER:
            # int64 is serialized as a string in proto3 JSON
            value = str(self._value)
        elif self._type == TypeName.DOUBLE:
            value = _format_double(self._value)
        elif self._type == TypeName.BLOB:
            value = base64.b64encode(self._value).decode('utf8')
        elif self._type == TypeName.TIMESTAMP:
            value = format_timestamp(self._value)
        elif self._type in {TypeName.KEY, TypeName.ENTITY}:
            value = self._value.to_repr(namespace)
        elif self._type == TypeName.GEOPOINT:
            value = self._value.to_repr()
        else:
            value = self._value

        return {
            'excludeFromIndexes': not self._indexed,
            self._type.value: value,
        }


class ValueBuilder:
    def __init__(self, value_kind: Type[Value] = Value) -> None:
        self._value_kind = value_kind
        self._value: Any = None
        self._indexed: Optional[bool] = None

    def value(self, value: Any) -> 'ValueBuilder':
        self._value = value
        return self

    def indexed(self, indexed: bool) -> 'ValueBuilder':
        self._indexed = indexed
        return self

    def build(self) -> Value:
        return self._value_kind(self._value, indexed=self._indexed)


def _format_double(value: float) -> Any:
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    return value


def format_timestamp(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    # %Y is not zero-padded below year 1000 on every platform
    return f'{value.year:04d}-' + value.strftime('%m-%dT%H:%M:%S.%f000Z')


def parse_timestamp(value: str) -> datetime:
    # strptime only supports microsecond precision, drop the nanoseconds
    date_string = value.rstrip('Z')[:26]
    date_fmt = ('%Y-%m-%dT%H:%M:%S.%f'
                if '.' in date_string else '%Y-%m-%dT%H:%M:%S')
    return datetime.strptime(date_string, date_fmt)
