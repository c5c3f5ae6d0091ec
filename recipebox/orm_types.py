# recipebox/orm_types.py
import enum

from sqlalchemy.types import TypeDecorator, Integer


class OrdinalEnum(TypeDecorator):
    """Store a Python Enum as its declaration-order ordinal.

    - Database: INTEGER (0, 1, 2, ...)
    - Python: the Enum member

    Ordering by the column therefore follows declaration order
    (Cuisine < Type < Custom) rather than the member names.
    """
    impl = Integer
    cache_ok = True

    def __init__(self, enum_cls: type[enum.Enum], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.enum_cls = enum_cls
        self._members = list(enum_cls)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, self.enum_cls):
            # accept names ("Cuisine") and raw values
            value = self.enum_cls(value)
        return self._members.index(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self._members[int(value)]

    def copy(self, **kw):
        return OrdinalEnum(self.enum_cls)
