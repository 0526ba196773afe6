"""Forgiving field access over JSON rows and ORM objects.

Collections reach the derivation layer either as API rows (dicts keyed in
camelCase or snake_case, sometimes joined as ``{"payment": {...}, "room": {...}}``)
or as SQLAlchemy model instances. Everything here reads both.
"""
from collections.abc import Mapping


def camel_case(name):
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def get_field(record, *names, default=None):
    """First non-None value among `names` (snake_case, camelCase tried too)."""
    if record is None:
        return default
    for name in names:
        for key in (name, camel_case(name)):
            if isinstance(record, Mapping):
                value = record.get(key)
            else:
                value = getattr(record, key, None)
            if value is not None:
                return value
    return default


def get_nested(record, parent, *names, default=None):
    """Field of a joined sub-record first, then of the record itself."""
    value = get_field(get_field(record, parent), *names)
    if value is not None:
        return value
    return get_field(record, *names, default=default)


def as_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
