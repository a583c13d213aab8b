from typing import Any
from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional
from typing import Union

from .key import Key
from .query import Statement


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/allocateIds
class AllocateIds(Statement):
    """Ask Datastore to complete a set of partial keys with unique ids."""
    key_kind = Key

    def __init__(self, keys: Optional[Iterable[Key]] = None) -> None:
        self.keys: List[Key] = list(keys or [])

    def add(self, kind_or_key: Union[str, Key]) -> 'AllocateIds':
        if isinstance(kind_or_key, str):
            kind_or_key = self.key_kind.builder(kind_or_key).build()
        self.keys.append(kind_or_key)
        return self

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AllocateIds):
            return False

        return self.keys == other.keys

    def __len__(self) -> int:
        return len(self.keys)

    def to_repr(self,
                namespace: Optional[str] = None) -> List[Dict[str, Any]]:
        return [k.to_repr(namespace) for k in self.keys]
