import pytest
from asyncdatastore import Key
from asyncdatastore import PathElement


class TestPathElement:
    @staticmethod
    def test_rejects_id_and_name():
        with pytest.raises(ValueError):
            PathElement('Kind', id_=1, name='a')

    @staticmethod
    def test_str():
        assert str(PathElement('Kind', id_=12)) == 'Kind:12'
        assert str(PathElement('Kind', name='fred')) == 'Kind:fred'

    @staticmethod
    def test_from_repr_converts_string_ids():
        element = PathElement.from_repr({'kind': 'Kind', 'id': '5678'})

        assert element.id == 5678
        assert element.name is None
        assert element.is_complete

    @staticmethod
    def test_to_repr_sends_ids_as_strings():
        assert PathElement('Kind', id_=5678).to_repr() == {
            'kind': 'Kind',
            'id': '5678',
        }
        assert PathElement('Kind').to_repr() == {'kind': 'Kind'}


class TestKey:
    @staticmethod
    def test_builder_with_kind_and_id():
        key = Key.builder('Employee', 1234).build()

        assert key.kind == 'Employee'
        assert key.id == 1234
        assert key.name is None
        assert key.is_complete

    @staticmethod
    def test_builder_with_kind_only_is_partial():
        key = Key.builder('Employee').build()

        assert key.kind == 'Employee'
        assert key.id is None
        assert not key.is_complete

    @staticmethod
    def test_empty_key():
        key = Key.builder().build()

        assert key.kind is None
        assert key.id is None
        assert key.name is None
        assert not key.is_complete

    @staticmethod
    def test_builder_with_parent():
        parent = Key.builder('Company', 'acme').build()
        key = Key.builder('Employee', 'fred', parent=parent).build()

        assert key.path == [PathElement('Company', name='acme'),
                            PathElement('Employee', name='fred')]
        assert str(key) == '{Company:acme,Employee:fred}'

    @staticmethod
    def test_parent_skips_incomplete_elements():
        parent = (Key.builder('Company', 'acme')
                  .path('Department')
                  .build())
        key = Key.builder('Employee', 1, parent=parent).build()

        assert [p.kind for p in key.path] == ['Company', 'Employee']

    @staticmethod
    def test_builder_copies_existing_key():
        key = Key.builder('Employee', 1).namespace('ns').project('p').build()
        copy = Key.builder(key).path('Child', 'x').build()

        assert copy.namespace == 'ns'
        assert copy.project == 'p'
        assert len(copy.path) == 2
        assert len(key.path) == 1

    @staticmethod
    def test_rejects_id_without_kind():
        with pytest.raises(ValueError):
            Key.builder(None, 12)

    @staticmethod
    @pytest.mark.parametrize('bad_id', [True, 1.5, b'bytes'])
    def test_rejects_invalid_ids(bad_id):
        with pytest.raises(TypeError):
            Key.builder('Kind', bad_id)

    @staticmethod
    def test_equality_and_hash():
        a = Key.builder('Kind', 1).namespace('ns').build()
        b = Key.builder('Kind', 1).namespace('ns').build()
        c = Key.builder('Kind', 1).build()

        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    @staticmethod
    def test_path_is_a_copy():
        key = Key.builder('Kind', 1).build()
        key.path.append(PathElement('Other'))

        assert len(key.path) == 1

    @staticmethod
    def test_to_repr():
        key = (Key.builder('Company', 'acme')
               .path('Employee', 7)
               .namespace('ns')
               .project('my-project')
               .build())

        assert key.to_repr() == {
            'partitionId': {
                'projectId': 'my-project',
                'namespaceId': 'ns',
            },
            'path': [
                {'kind': 'Company', 'name': 'acme'},
                {'kind': 'Employee', 'id': '7'},
            ],
        }

    @staticmethod
    def test_to_repr_namespace_override():
        key = Key.builder('Kind', 1).namespace('mine').build()

        assert key.to_repr('other')['partitionId'] == {'namespaceId': 'other'}
        assert key.to_repr()['partitionId'] == {'namespaceId': 'mine'}

    @staticmethod
    def test_to_repr_without_partition():
        assert Key.builder('Kind').build().to_repr() == {
            'path': [{'kind': 'Kind'}],
        }

    @staticmethod
    def test_from_repr():
        data = {
            'partitionId': {'projectId': 'p', 'namespaceId': 'ns'},
            'path': [{'kind': 'Kind', 'id': '42'}],
        }

        key = Key.from_repr(data)

        expected = Key.builder('Kind', 42).namespace('ns').project('p')
        assert key == expected.build()

    @staticmethod
    def test_from_repr_without_partition():
        key = Key.from_repr({'path': [{'kind': 'Kind', 'name': 'x'}]})

        assert key.namespace == ''
        assert key.project == ''
        assert key.name == 'x'
