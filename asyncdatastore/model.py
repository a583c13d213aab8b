"""
Typed views over `Entity` objects.

Subclass `DatastoreEntity` and declare properties as class attributes::

    class Track(DatastoreEntity):
        title = StringProperty()
        plays = IntegerProperty()
        album = EntityProperty(Album)

    track = Track(entity)
    track.plays = track.plays + 1
    await ds.execute(Update(track.to_entity()))

Reads come from the wrapped entity (or a pending write); writes are recorded
and only applied when `to_entity()` is called. Assigning `None` removes the
property.
"""
from datetime import datetime
from typing import Any
from typing import Dict
from typing import Generic
from typing import Optional
from typing import Tuple
from typing import Type
from typing import TypeVar
from typing import Union

from .entity import Entity
from .key import Key
from .value import Value


T = TypeVar('T')
M = TypeVar('M', bound='DatastoreEntity')


class _Removed:  # pylint: disable=too-few-public-methods
    pass


_REMOVED = _Removed()


class Property(Generic[T]):
    python_type: Type[Any] = object
    # other types accepted on assignment and converted by `to_value`
    also_accepts: Tuple[Type[Any], ...] = ()

    def __init__(self, name: Optional[str] = None,
                 indexed: Optional[bool] = None) -> None:
        self.name = name
        self.indexed = indexed

    def __set_name__(self, owner: Type[Any], attr: str) -> None:
        if self.name is None:
            self.name = attr

    def __get__(self, instance: Optional['DatastoreEntity'],
                owner: Type[Any]) -> Any:
        if instance is None:
            return self

        # pylint: disable=protected-access
        assert self.name is not None
        value = instance._current(self.name)
        if value is None or value.is_null:
            return None
        return self.from_value(value)

    def __set__(self, instance: 'DatastoreEntity', value: Optional[T]) -> None:
        # pylint: disable=protected-access
        assert self.name is not None
        if value is None:
            instance._updates[self.name] = _REMOVED
            return

        accepted = (self.python_type,) + self.also_accepts
        if not isinstance(value, accepted) or (
                isinstance(value, bool) and self.python_type is not bool):
            raise TypeError(f'{self.name} expects {self.python_type.__name__}'
                            f', got {type(value).__name__}')
        instance._updates[self.name] = self.to_value(value)

    def from_value(self, value: Value) -> T:
        raise NotImplementedError

    def to_value(self, value: T) -> Value:
        return Value(value, indexed=self.indexed)


class StringProperty(Property[str]):
    python_type = str

    def from_value(self, value: Value) -> str:
        return value.string


class IntegerProperty(Property[int]):
    python_type = int

    def from_value(self, value: Value) -> int:
        return value.integer


class DoubleProperty(Property[float]):
    python_type = float
    also_accepts = (int,)

    def from_value(self, value: Value) -> float:
        return value.double

    def to_value(self, value: float) -> Value:
        return Value(float(value), indexed=self.indexed)


class BooleanProperty(Property[bool]):
    python_type = bool

    def from_value(self, value: Value) -> bool:
        return value.boolean


class DateProperty(Property[datetime]):
    python_type = datetime

    def from_value(self, value: Value) -> datetime:
        return value.date


class BlobProperty(Property[bytes]):
    python_type = bytes

    def from_value(self, value: Value) -> bytes:
        return value.blob


class KeyProperty(Property[Key]):
    python_type = Key

    def from_value(self, value: Value) -> Key:
        return value.key


class EntityProperty(Property[M]):
    """An embedded entity, exposed as an instance of `model`."""

    def __init__(self, model: Type[M], name: Optional[str] = None,
                 indexed: Optional[bool] = None) -> None:
        super().__init__(name=name, indexed=indexed)
        self.model = model
        self.python_type = model

    def from_value(self, value: Value) -> M:
        return self.model(value.entity)

    def to_value(self, value: M) -> Value:
        return Value(value.to_entity(), indexed=self.indexed)


class DatastoreEntity:
    def __init__(self, entity: Optional[Entity] = None) -> None:
        self.entity = entity if entity is not None else Entity()
        self._updates: Dict[str, Union[Value, _Removed]] = {}

    @property
    def key(self) -> Optional[Key]:
        return self.entity.key

    @property
    def dirty(self) -> bool:
        return bool(self._updates)

    def _current(self, name: str) -> Optional[Value]:
        update = self._updates.get(name)
        if isinstance(update, _Removed):
            return None
        if update is not None:
            return update
        return self.entity.get(name)

    def to_entity(self, key: Optional[Key] = None) -> Entity:
        """Return a new `Entity` with every pending write applied."""
        builder = Entity.builder(self.entity)
        if key is not None:
            builder.key(key)

        for name, update in self._updates.items():
            if isinstance(update, _Removed):
                builder.remove(name)
            else:
                builder.property(name, update)
        return builder.build()

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.to_entity()})'
