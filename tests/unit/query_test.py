import pytest
from asyncdatastore import Filter
from asyncdatastore import Group
from asyncdatastore import Key
from asyncdatastore import KeyQuery
from asyncdatastore import Order
from asyncdatastore import Query


class TestQuery:
    @staticmethod
    def test_empty_query():
        assert Query().to_repr() == {'kind': []}

    @staticmethod
    def test_single_filter_is_sent_as_is():
        query = Query().kind_of('Employee').filter_by(Filter.eq('age', 40))

        data = query.to_repr()

        assert data['kind'] == [{'name': 'Employee'}]
        assert data['filter'] == Filter.eq('age', 40).to_repr()

    @staticmethod
    def test_several_filters_are_combined():
        query = (Query().kind_of('Employee')
                 .filter_by(Filter.gt('age', 21))
                 .filter_by(Filter.eq('role', 'engineer')))

        data = query.to_repr()

        assert data['filter'] == {
            'compositeFilter': {
                'op': 'AND',
                'filters': [
                    Filter.gt('age', 21).to_repr(),
                    Filter.eq('role', 'engineer').to_repr(),
                ],
            },
        }

    @staticmethod
    def test_full_query():
        query = (Query().kind_of('Employee')
                 .order_by(Order.desc('age'))
                 .order_by(Order.asc('name'))
                 .group_by(Group('department'))
                 .properties('age', 'name')
                 .from_cursor('c1')
                 .to_cursor('c2')
                 .offset(5)
                 .limit(10))

        assert query.to_repr() == {
            'kind': [{'name': 'Employee'}],
            'order': [
                {'property': {'name': 'age'}, 'direction': 'DESCENDING'},
                {'property': {'name': 'name'}, 'direction': 'ASCENDING'},
            ],
            'projection': [
                {'property': {'name': 'age'}},
                {'property': {'name': 'name'}},
            ],
            'distinctOn': [{'name': 'department'}],
            'startCursor': 'c1',
            'endCursor': 'c2',
            'offset': 5,
            'limit': 10,
        }

    @staticmethod
    def test_keys_only():
        data = Query().kind_of('Employee').keys_only().to_repr()

        assert data['projection'] == [{'property': {'name': '__key__'}}]

    @staticmethod
    def test_limit_zero_is_sent():
        assert Query().limit(0).to_repr()['limit'] == 0

    @staticmethod
    def test_rejects_negative_limit_and_offset():
        with pytest.raises(ValueError):
            Query().limit(-1)
        with pytest.raises(ValueError):
            Query().offset(-1)

    @staticmethod
    def test_namespace_reaches_filter_keys():
        ancestor = Key.builder('Company', 'acme').build()
        query = Query().filter_by(Filter.ancestor(ancestor))

        data = query.to_repr('ns')

        value = data['filter']['propertyFilter']['value']
        assert value['keyValue']['partitionId'] == {'namespaceId': 'ns'}

    @staticmethod
    def test_equality():
        assert Query().kind_of('A').limit(1) == Query().kind_of('A').limit(1)
        assert Query().kind_of('A') != Query().kind_of('B')


class TestKeyQuery:
    @staticmethod
    def test_to_repr():
        key = Key.builder('Employee', 1).namespace('old').build()

        assert KeyQuery(key).to_repr() == key.to_repr()
        assert KeyQuery(key).to_repr('new') == key.to_repr('new')

    @staticmethod
    def test_equality():
        key = Key.builder('Employee', 1).build()

        assert KeyQuery(key) == KeyQuery(key)
        assert KeyQuery(key) != KeyQuery(Key.builder('Employee', 2).build())
