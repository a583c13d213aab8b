from asyncdatastore import AllocateIdsResult
from asyncdatastore import Entity
from asyncdatastore import Key
from asyncdatastore import MoreResultsType
from asyncdatastore import MutationResult
from asyncdatastore import QueryResult
from asyncdatastore import RollbackResult
from asyncdatastore import TransactionResult


def _entity_repr(id_: int, name: str) -> dict:
    return {
        'key': {'path': [{'kind': 'Employee', 'id': str(id_)}]},
        'properties': {'name': {'stringValue': name}},
    }


class TestMutationResult:
    @staticmethod
    def test_from_repr():
        result = MutationResult.from_repr({
            'mutationResults': [
                {'key': {'path': [{'kind': 'Employee', 'id': '5'}]},
                 'version': '10'},
                {'version': '11'},
            ],
            'indexUpdates': 4,
        })

        assert result.insert_key == Key.builder('Employee', 5).build()
        assert result.insert_keys == [Key.builder('Employee', 5).build()]
        assert result.versions == ['10', '11']
        assert result.index_updates == 4

    @staticmethod
    def test_empty():
        result = MutationResult.empty()

        assert result.insert_key is None
        assert result.insert_keys == []
        assert result.index_updates == 0
        assert result == MutationResult.from_repr({})


class TestQueryResult:
    @staticmethod
    def test_from_batch():
        result = QueryResult.from_batch({
            'entityResultType': 'FULL',
            'entityResults': [
                {'entity': _entity_repr(1, 'fred'), 'version': '1'},
                {'entity': _entity_repr(2, 'jane'), 'version': '1'},
            ],
            'endCursor': 'abc=',
            'moreResults': 'MORE_RESULTS_AFTER_LIMIT',
        })

        assert len(result) == 2
        assert result.entity.get_string('name') == 'fred'
        assert [e.key.id for e in result] == [1, 2]
        assert result.cursor == 'abc='
        assert result.more_results == MoreResultsType.MORE_RESULTS_AFTER_LIMIT
        assert result.has_more

    @staticmethod
    def test_from_lookup():
        result = QueryResult.from_lookup({
            'found': [{'entity': _entity_repr(1, 'fred')}],
            'missing': [{'entity': {'key': {'path': [{'kind': 'Employee',
                                                      'id': '2'}]}}}],
            'deferred': [{'path': [{'kind': 'Employee', 'id': '3'}]}],
        })

        assert result.all == [Entity.from_repr(_entity_repr(1, 'fred'))]
        assert result.missing == [Key.builder('Employee', 2).build()]
        assert result.deferred == [Key.builder('Employee', 3).build()]
        assert result.cursor is None

    @staticmethod
    def test_empty():
        result = QueryResult.empty()

        assert result.entity is None
        assert result.all == []
        assert len(result) == 0
        assert not result.has_more
        assert result == QueryResult.from_batch({})

    @staticmethod
    def test_all_is_a_copy():
        result = QueryResult([Entity()])
        result.all.clear()

        assert len(result) == 1


class TestOtherResults:
    @staticmethod
    def test_transaction_result():
        result = TransactionResult.from_repr({'transaction': 'dHhu'})

        assert result.transaction == 'dHhu'
        assert result == TransactionResult('dHhu')

    @staticmethod
    def test_allocate_ids_result():
        result = AllocateIdsResult.from_repr({
            'keys': [{'path': [{'kind': 'Employee', 'id': '9'}]}],
        })

        assert len(result) == 1
        assert list(result) == [Key.builder('Employee', 9).build()]

    @staticmethod
    def test_rollback_result():
        assert RollbackResult() == RollbackResult()
