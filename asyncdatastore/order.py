from typing import Any
from typing import Dict

from .constants import Direction


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/runQuery#PropertyOrder
class Order:
    def __init__(self, name: str,
                 direction: Direction = Direction.ASCENDING) -> None:
        self.name = name
        self.direction = direction

    @classmethod
    def asc(cls, name: str) -> 'Order':
        return cls(name, Direction.ASCENDING)

    @classmethod
    def desc(cls, name: str) -> 'Order':
        return cls(name, Direction.DESCENDING)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Order):
            return False

        return bool(
            self.name == other.name
            and self.direction == other.direction,
        )

    def __repr__(self) -> str:
        return str(self.to_repr())

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'Order':
        name = data['property']['name']
        direction = Direction(data.get('direction', Direction.ASCENDING.value))
        return cls(name, direction)

    def to_repr(self) -> Dict[str, Any]:
        return {
            'property': {'name': self.name},
            'direction': self.direction.value,
        }
