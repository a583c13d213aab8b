from asyncdatastore import Direction
from asyncdatastore import Group
from asyncdatastore import Order


class TestOrder:
    @staticmethod
    def test_defaults_to_ascending():
        assert Order('age') == Order.asc('age')
        assert Order('age').direction == Direction.ASCENDING

    @staticmethod
    def test_to_repr():
        assert Order.desc('age').to_repr() == {
            'property': {'name': 'age'},
            'direction': 'DESCENDING',
        }

    @staticmethod
    def test_from_repr():
        order = Order.desc('age')

        assert Order.from_repr(order.to_repr()) == order

    @staticmethod
    def test_from_repr_without_direction():
        order = Order.from_repr({'property': {'name': 'age'}})

        assert order == Order.asc('age')

    @staticmethod
    def test_not_equal_to_other_types():
        assert Order('age') != 'age'


class TestGroup:
    @staticmethod
    def test_to_repr():
        assert Group('department').to_repr() == {'name': 'department'}

    @staticmethod
    def test_from_repr():
        group = Group.from_repr({'name': 'department'})

        assert group == Group('department')
        assert group != Group('age')
