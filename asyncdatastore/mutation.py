from typing import Any
from typing import Dict
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Union

from .constants import Operation
from .entity import Entity
from .entity import EntityBuilder
from .key import Key
from .query import Statement


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/commit#Mutation
class MutationStatement(Statement):
    operation: Operation

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        raise NotImplementedError


class _EntityStatement(MutationStatement):
    entity_kind = Entity

    def __init__(self, key_or_entity: Union[Key, Entity]) -> None:
        if not isinstance(key_or_entity, (Key, Entity)):
            raise TypeError(f'expected a Key or an Entity, got '
                            f'{type(key_or_entity).__name__}')
        self._entity: EntityBuilder = self.entity_kind.builder(key_or_entity)

    @property
    def entity(self) -> Entity:
        return self._entity.build()

    def _set(self, name: str, value: Any, indexed: Optional[bool]) -> None:
        self._entity.property(name, value, indexed=indexed)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, type(self)):
            return False

        return self.to_repr() == other.to_repr()

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        return {self.operation.value: self.entity.to_repr(namespace)}


class Insert(_EntityStatement):
    """Insert a new entity; the commit fails if it already exists."""
    operation = Operation.INSERT

    def value(self, name: str, value: Any,
              indexed: Optional[bool] = None) -> 'Insert':
        self._set(name, value, indexed)
        return self


class Update(_EntityStatement):
    """
    Replace an existing entity.

    Call `upsert()` to create the entity when it does not exist instead of
    failing the commit.
    """

    def __init__(self, key_or_entity: Union[Key, Entity]) -> None:
        super().__init__(key_or_entity)
        self.operation = Operation.UPDATE

    def value(self, name: str, value: Any,
              indexed: Optional[bool] = None) -> 'Update':
        self._set(name, value, indexed)
        return self

    def upsert(self) -> 'Update':
        self.operation = Operation.UPSERT
        return self


class Delete(MutationStatement):
    operation = Operation.DELETE

    def __init__(self, key: Key) -> None:
        if not isinstance(key, Key):
            raise TypeError(f'expected a Key, got {type(key).__name__}')
        self.key = key

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Delete):
            return False

        return self.key == other.key

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        return {self.operation.value: self.key.to_repr(namespace)}


class Batch(Statement):
    """Several mutations committed together, in the order they were added."""

    def __init__(self,
                 statements: Optional[Iterable[MutationStatement]] = None,
                 ) -> None:
        self.statements: List[MutationStatement] = []
        for statement in statements or []:
            self.add(statement)

    def add(self, statement: MutationStatement) -> 'Batch':
        if not isinstance(statement, MutationStatement):
            raise TypeError(f'cannot batch {type(statement).__name__}')
        self.statements.append(statement)
        return self

    def __iter__(self) -> Iterator[MutationStatement]:
        return iter(self.statements)

    def __len__(self) -> int:
        return len(self.statements)

    def to_repr(self,
                namespace: Optional[str] = None) -> List[Dict[str, Any]]:
        return [s.to_repr(namespace) for s in self.statements]
