from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Tuple
from typing import Union


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/Key#PathElement
class PathElement:
    """A single `(kind, id|name)` step of a key path."""

    __slots__ = ('_kind', '_id', '_name')

    def __init__(self, kind: str, id_: Optional[int] = None,
                 name: Optional[str] = None) -> None:
        if id_ is not None and name is not None:
            raise ValueError('invalid PathElement contains both ID and name')

        self._kind = kind
        self._id = id_
        self._name = name

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def is_complete(self) -> bool:
        return self._id is not None or self._name is not None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, PathElement):
            return False

        return bool(self.kind == other.kind and self.id == other.id
                    and self.name == other.name)

    def __hash__(self) -> int:
        return hash((self._kind, self._id, self._name))

    def __repr__(self) -> str:
        return str(self.to_repr())

    def __str__(self) -> str:
        return f'{self.kind}:{self.id if self.id is not None else self.name}'

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'PathElement':
        kind: str = data['kind']
        # int64 values are serialized as strings in the JSON API
        id_ = int(data['id']) if data.get('id') is not None else None
        name: Optional[str] = data.get('name')
        return cls(kind, id_=id_, name=name)

    def to_repr(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'kind': self.kind}
        if self.id is not None:
            data['id'] = str(self.id)
        elif self.name is not None:
            data['name'] = self.name

        return data


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/Key
class Key:
    """
    An entity key: an ancestor path plus the partition it lives in.

    Keys are immutable; use `Key.builder()` to construct new instances, or to
    derive a modified copy of an existing key.
    """
    path_element_kind = PathElement

    __slots__ = ('_project', '_namespace', '_path')

    def __init__(self, path: Optional[List[PathElement]] = None,
                 namespace: str = '', project: str = '') -> None:
        self._path: Tuple[PathElement, ...] = tuple(path or ())
        self._namespace = namespace
        self._project = project

    @classmethod
    def builder(cls, kind_or_key: Union[None, str, 'Key'] = None,
                id_or_name: Union[None, int, str] = None,
                parent: Optional['Key'] = None) -> 'KeyBuilder':
        """
        Start a new `KeyBuilder`.

        Accepted forms:

        * `Key.builder()`: an empty builder
        * `Key.builder(kind)`: a partial key of the given kind
        * `Key.builder(kind, 1234)` / `Key.builder(kind, 'name')`
        * any of the above with `parent=key` to prefix the parent's path
        * `Key.builder(key)`: a builder seeded from an existing key
        """
        if isinstance(kind_or_key, Key):
            if id_or_name is not None or parent is not None:
                raise ValueError('cannot combine an existing key with an '
                                 'id, name or parent')
            return KeyBuilder(kind_or_key)

        builder = KeyBuilder()
        if parent is not None:
            builder.parent(parent)
        if kind_or_key is not None:
            builder.path(kind_or_key, id_or_name)
        elif id_or_name is not None:
            raise ValueError('an id or name requires a kind')
        return builder

    @property
    def project(self) -> str:
        return self._project

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def path(self) -> List[PathElement]:
        return list(self._path)

    @property
    def is_complete(self) -> bool:
        """A complete key has a path where every element has an id or name."""
        if not self._path:
            return False

        return all(p.is_complete for p in self._path)

    @property
    def kind(self) -> Optional[str]:
        return self._path[-1].kind if self._path else None

    @property
    def id(self) -> Optional[int]:
        return self._path[-1].id if self._path else None

    @property
    def name(self) -> Optional[str]:
        return self._path[-1].name if self._path else None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Key):
            return False

        return bool(self.project == other.project
                    and self.namespace == other.namespace
                    and self._path == other._path)

    def __hash__(self) -> int:
        return hash((self._project, self._namespace, self._path))

    def __repr__(self) -> str:
        return str(self.to_repr())

    def __str__(self) -> str:
        return '{' + ','.join(str(p) for p in self._path) + '}'

    @classmethod
    def from_repr(cls, data: Dict[str, Any]) -> 'Key':
        partition = data.get('partitionId', {})
        return cls(path=[cls.path_element_kind.from_repr(p)
                         for p in data.get('path', [])],
                   namespace=partition.get('namespaceId', ''),
                   project=partition.get('projectId', ''))

    def to_repr(self, namespace: Optional[str] = None) -> Dict[str, Any]:
        """
        Serialize to a wire key.

        A non-`None` `namespace` replaces the key's own namespace.
        """
        partition: Dict[str, str] = {}
        if self.project:
            partition['projectId'] = self.project

        ns = self.namespace if namespace is None else namespace
        if ns:
            partition['namespaceId'] = ns

        data: Dict[str, Any] = {'path': [p.to_repr() for p in self._path]}
        if partition:
            data['partitionId'] = partition
        return data


class KeyBuilder:
    def __init__(self, key: Optional[Key] = None) -> None:
        self._path: List[PathElement] = key.path if key else []
        self._namespace = key.namespace if key else ''
        self._project = key.project if key else ''

    def build(self) -> Key:
        return Key(path=self._path, namespace=self._namespace,
                   project=self._project)

    def namespace(self, namespace: str) -> 'KeyBuilder':
        self._namespace = namespace
        return self

    def project(self, project: str) -> 'KeyBuilder':
        self._project = project
        return self

    def path(self, kind_or_element: Union[str, PathElement],
             id_or_name: Union[None, int, str] = None) -> 'KeyBuilder':
        if isinstance(kind_or_element, PathElement):
            if id_or_name is not None:
                raise ValueError('cannot combine a PathElement with an id or '
                                 'name')
            self._path.append(kind_or_element)
            return self

        # bool is an int subclass, but never a valid id
        if isinstance(id_or_name, bool):
            raise TypeError('key ids must be integers, not booleans')
        if isinstance(id_or_name, int):
            element = PathElement(kind_or_element, id_=id_or_name)
        elif isinstance(id_or_name, str):
            element = PathElement(kind_or_element, name=id_or_name)
        elif id_or_name is None:
            element = PathElement(kind_or_element)
        else:
            raise TypeError(f'unsupported key id type {type(id_or_name)}')

        self._path.append(element)
        return self

    def parent(self, parent: Key) -> 'KeyBuilder':
        """Prefix this key with the complete elements of `parent`'s path."""
        self._path.extend(p for p in parent.path if p.is_complete)
        return self
