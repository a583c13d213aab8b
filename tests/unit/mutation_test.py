import pytest
from asyncdatastore import AllocateIds
from asyncdatastore import Batch
from asyncdatastore import Delete
from asyncdatastore import Entity
from asyncdatastore import Insert
from asyncdatastore import Key
from asyncdatastore import Update


class TestMutations:
    @staticmethod
    @pytest.fixture(scope='session')
    def key() -> Key:
        return Key.builder('Employee', 1234).build()

    @staticmethod
    def test_insert(key):
        insert = (Insert(key)
                  .value('fullname', 'Fred Blinge')
                  .value('notes', 'long', indexed=False))

        assert insert.to_repr() == {
            'insert': {
                'key': key.to_repr(),
                'properties': {
                    'fullname': {'excludeFromIndexes': False,
                                 'stringValue': 'Fred Blinge'},
                    'notes': {'excludeFromIndexes': True,
                              'stringValue': 'long'},
                },
            },
        }

    @staticmethod
    def test_insert_from_entity(key):
        entity = Entity.builder(key).property('age', 40).build()

        data = Insert(entity).value('age', 41).to_repr()

        assert data['insert']['properties']['age']['integerValue'] == '41'
        assert entity.get_integer('age') == 40

    @staticmethod
    def test_insert_list_value(key):
        data = Insert(key).value('tags', ['a', 'b']).to_repr()

        tags = data['insert']['properties']['tags']
        assert [v['stringValue'] for v in tags['arrayValue']['values']] == \
            ['a', 'b']

    @staticmethod
    def test_update(key):
        data = Update(key).value('age', 41).to_repr()

        assert list(data) == ['update']

    @staticmethod
    def test_upsert(key):
        data = Update(key).value('age', 41).upsert().to_repr()

        assert list(data) == ['upsert']
        assert data['upsert']['key'] == key.to_repr()

    @staticmethod
    def test_delete(key):
        assert Delete(key).to_repr() == {'delete': key.to_repr()}

    @staticmethod
    def test_rejects_invalid_targets():
        with pytest.raises(TypeError):
            Insert('Employee')
        with pytest.raises(TypeError):
            Delete(Entity())

    @staticmethod
    def test_namespace_override(key):
        data = Delete(key).to_repr('ns')

        assert data['delete']['partitionId'] == {'namespaceId': 'ns'}

    @staticmethod
    def test_entity_property(key):
        insert = Insert(key).value('age', 3)

        assert insert.entity.get_integer('age') == 3
        assert insert.entity.key == key


class TestBatch:
    @staticmethod
    def test_keeps_insertion_order():
        first = Delete(Key.builder('A', 1).build())
        second = Insert(Key.builder('B').build()).value('x', 1)
        third = Update(Key.builder('C', 'c').build()).upsert()

        batch = Batch().add(first).add(second).add(third)

        assert len(batch) == 3
        assert list(batch) == [first, second, third]
        assert [list(m) for m in batch.to_repr()] == [
            ['delete'], ['insert'], ['upsert']]

    @staticmethod
    def test_constructor_accepts_statements():
        delete = Delete(Key.builder('A', 1).build())

        assert list(Batch([delete])) == [delete]

    @staticmethod
    def test_rejects_non_mutations():
        with pytest.raises(TypeError):
            Batch().add(AllocateIds())


class TestAllocateIds:
    @staticmethod
    def test_add_kind_and_key():
        parent = Key.builder('Company', 'acme').build()
        partial = Key.builder('Employee', parent=parent).build()

        statement = AllocateIds().add('Employee').add(partial)

        assert len(statement) == 2
        assert statement.to_repr('ns') == [
            {
                'partitionId': {'namespaceId': 'ns'},
                'path': [{'kind': 'Employee'}],
            },
            {
                'partitionId': {'namespaceId': 'ns'},
                'path': [
                    {'kind': 'Company', 'name': 'acme'},
                    {'kind': 'Employee'},
                ],
            },
        ]

    @staticmethod
    def test_constructor_keys():
        key = Key.builder('Employee').build()

        assert AllocateIds([key]) == AllocateIds().add('Employee')
