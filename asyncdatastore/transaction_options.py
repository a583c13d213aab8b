"""
Modes accepted by `Datastore.transaction()`.

A read-only transaction may pin its reads to a point in time; a read-write
transaction may name an aborted transaction it is retrying, which lets the
service hand the retry the locks held by the earlier attempt::

    txn = await ds.transaction(TransactionOptions.read_write())
    ...
    txn = await ds.transaction(TransactionOptions.read_write(txn))
"""
from datetime import datetime
from typing import Any
from typing import Dict
from typing import Optional
from typing import Union

from .result import TransactionResult
from .value import format_timestamp


Transaction = Union[str, TransactionResult]


class ReadOnly:
    def __init__(self, read_time: Optional[datetime] = None) -> None:
        self.read_time = read_time

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReadOnly):
            return False

        return self.read_time == other.read_time

    def __repr__(self) -> str:
        return f'ReadOnly(read_time={self.read_time!r})'

    def to_repr(self) -> Dict[str, str]:
        if self.read_time is not None:
            return {'readTime': format_timestamp(self.read_time)}

        return {}


class ReadWrite:
    def __init__(self,
                 previous_transaction: Optional[Transaction] = None) -> None:
        if isinstance(previous_transaction, TransactionResult):
            previous_transaction = previous_transaction.transaction
        self.previous_transaction = previous_transaction

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReadWrite):
            return False

        return self.previous_transaction == other.previous_transaction

    def __repr__(self) -> str:
        return f'ReadWrite(previous_transaction={self.previous_transaction!r})'

    def to_repr(self) -> Dict[str, str]:
        if self.previous_transaction:
            return {'previousTransaction': self.previous_transaction}

        return {}


# https://cloud.google.com/datastore/docs/reference/data/rest/v1/TransactionOptions
class TransactionOptions:
    def __init__(self, option: Union[ReadWrite, ReadOnly]) -> None:
        if not isinstance(option, (ReadOnly, ReadWrite)):
            raise TypeError(f'expected ReadOnly or ReadWrite, got '
                            f'{type(option).__name__}')
        self.option = option

    @classmethod
    def read_only(cls, read_time: Optional[datetime] = None,
                  ) -> 'TransactionOptions':
        return cls(ReadOnly(read_time))

    @classmethod
    def read_write(cls, previous_transaction: Optional[Transaction] = None,
                   ) -> 'TransactionOptions':
        return cls(ReadWrite(previous_transaction))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TransactionOptions):
            return False

        return self.option == other.option

    def __repr__(self) -> str:
        return f'TransactionOptions({self.option!r})'

    def to_repr(self) -> Dict[str, Dict[str, str]]:
        mode = 'readOnly' if isinstance(self.option, ReadOnly) else 'readWrite'
        return {mode: self.option.to_repr()}
