from typing import Any
from typing import Dict


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/projects/runQuery#PropertyReference
class Group:
    """A property to group query results on, sent as `distinctOn`."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Group):
            return False

        return self.name == other.name

    def __repr__(self) -> str:
        return str(self.to_repr())

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'Group':
        return cls(data['name'])

    def to_repr(self) -> Dict[str, str]:
        return {'name': self.name}
