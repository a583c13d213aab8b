"""
This library implements a fluent, asynchronous client for the Google Cloud
Datastore v1 API.

## Installation

```console
$ pip install --upgrade async-datastore-client
```

## Usage

```python
from asyncdatastore import Batch
from asyncdatastore import Datastore
from asyncdatastore import DatastoreConfig
from asyncdatastore import Delete
from asyncdatastore import Filter
from asyncdatastore import Insert
from asyncdatastore import Key
from asyncdatastore import KeyQuery
from asyncdatastore import Order
from asyncdatastore import Query
from asyncdatastore import Update

config = DatastoreConfig(project='my-project',
                         service_file='/path/to/creds.json')

async with Datastore(config) as ds:
    # partial keys are completed by Datastore on insert
    result = await ds.execute(Insert(Key.builder('Employee').build())
                              .value('fullname', 'Fred Blinge')
                              .value('age', 40)
                              .value('notes', 'long text', indexed=False))
    key = result.insert_key

    # lookups by key
    employee = (await ds.execute(KeyQuery(key))).entity
    print(employee.get_string('fullname'))

    # queries
    query = (Query().kind_of('Employee')
             .filter_by(Filter.gt('age', 21))
             .order_by(Order.desc('age'))
             .limit(10))
    result = await ds.execute(query)
    for entity in result:
        print(entity)

    # fetch the next page
    result = await ds.execute(query.from_cursor(result.cursor))

    # transactions
    txn = await ds.transaction()
    try:
        await ds.execute(Batch()
                         .add(Update(key).value('age', 41))
                         .add(Delete(Key.builder('Employee', 1234).build())),
                         transaction=txn)
    except Exception:
        await ds.rollback(txn)
        raise
```

Requests are sent without authentication to the emulator given by
`DATASTORE_EMULATOR_HOST`, or to any non-default `host`.
"""
from importlib import metadata

from .allocate_ids import AllocateIds
from .config import DatastoreConfig
from .constants import CompositeFilterOperator
from .constants import Consistency
from .constants import Direction
from .constants import KEY_PROPERTY
from .constants import Mode
from .constants import MoreResultsType
from .constants import Operation
from .constants import PropertyFilterOperator
from .constants import ResultType
from .constants import SCOPES
from .constants import TypeName
from .datastore import Datastore
from .entity import Entity
from .entity import EntityBuilder
from .exceptions import DatastoreException
from .filter import BaseFilter
from .filter import CompositeFilter
from .filter import Filter
from .group import Group
from .key import Key
from .key import KeyBuilder
from .key import PathElement
from .lat_lng import LatLng
from .model import BlobProperty
from .model import BooleanProperty
from .model import DatastoreEntity
from .model import DateProperty
from .model import DoubleProperty
from .model import EntityProperty
from .model import IntegerProperty
from .model import KeyProperty
from .model import StringProperty
from .mutation import Batch
from .mutation import Delete
from .mutation import Insert
from .mutation import MutationStatement
from .mutation import Update
from .order import Order
from .query import KeyQuery
from .query import Query
from .query import Statement
from .result import AllocateIdsResult
from .result import MutationResult
from .result import QueryResult
from .result import RollbackResult
from .result import TransactionResult
from .session import DatastoreSession
from .transaction_options import ReadOnly
from .transaction_options import ReadWrite
from .transaction_options import TransactionOptions
from .value import Value
from .value import ValueBuilder


__version__ = metadata.version('async-datastore-client')
__all__ = [
    'AllocateIds',
    'AllocateIdsResult',
    'BaseFilter',
    'Batch',
    'BlobProperty',
    'BooleanProperty',
    'CompositeFilter',
    'CompositeFilterOperator',
    'Consistency',
    'Datastore',
    'DatastoreConfig',
    'DatastoreEntity',
    'DatastoreException',
    'DatastoreSession',
    'DateProperty',
    'Delete',
    'Direction',
    'DoubleProperty',
    'Entity',
    'EntityBuilder',
    'EntityProperty',
    'Filter',
    'Group',
    'Insert',
    'IntegerProperty',
    'KEY_PROPERTY',
    'Key',
    'KeyBuilder',
    'KeyProperty',
    'KeyQuery',
    'LatLng',
    'Mode',
    'MoreResultsType',
    'MutationResult',
    'MutationStatement',
    'Operation',
    'Order',
    'PathElement',
    'PropertyFilterOperator',
    'Query',
    'QueryResult',
    'ReadOnly',
    'ReadWrite',
    'ResultType',
    'RollbackResult',
    'SCOPES',
    'Statement',
    'StringProperty',
    'TransactionOptions',
    'TransactionResult',
    'TypeName',
    'Update',
    'Value',
    'ValueBuilder',
    '__version__',
]
