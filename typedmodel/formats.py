"""
String formats: a named pair of functions to convert between the string
found in JSON and a richer Python value (a date, a decimal, a custom type).

A property uses a format by declaring it next to a string type:

    {'type': 'string', 'format': 'date-time'}

When building, the string is run through `load`; when serializing, any value
which is not already a string is run through `dump`. Unknown formats are
not an error: the value is used as it is.
"""

import datetime
import logging
from typing import Any, Callable, Dict, Optional

import attr
import marshmallow
from marshmallow import fields


logger = logging.getLogger(__name__)


@attr.s(frozen=True)
class Format:
    load: Callable[[Any], Any] = attr.ib()
    dump: Callable[[Any], str] = attr.ib()


class FormatRegistry:
    """Maps format names to `Format` instances. The last registration wins."""

    def __init__(self, formats: Optional[Dict[str, Format]] = None):
        self.formats = dict(formats or {})

    def register(self, name, load, dump):
        fmt = Format(load=load, dump=dump)
        if name in self.formats:
            logger.debug('Replacing string format %r', name)
        else:
            logger.debug('Registering string format %r', name)
        self.formats[name] = fmt
        return fmt

    def find(self, name) -> Optional[Format]:
        if not name:
            return None
        return self.formats.get(name)

    def load_value(self, name, value):
        fmt = self.find(name)
        return fmt.load(value) if fmt else value

    def dump_value(self, name, value):
        fmt = self.find(name)
        if fmt:
            return fmt.dump(value)
        if isinstance(value, bool):
            return 'true' if value else 'false'
        return str(value)

    def copy(self):
        return FormatRegistry(self.formats)

    def __contains__(self, name):
        return name in self.formats


_DATE = fields.Date()
_DATETIME = fields.DateTime(format='iso')


def load_date(value):
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value

    try:
        return _DATE.deserialize(value)
    except marshmallow.ValidationError:
        # A full timestamp is still a valid way to give a date.
        return _DATETIME.deserialize(value).date()


def dump_date(value):
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        value = value.date()
    return _DATE.serialize('value', {'value': value})


def load_datetime(value):
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, datetime.date):
        return datetime.datetime.combine(value, datetime.time())

    try:
        return _DATETIME.deserialize(value)
    except marshmallow.ValidationError:
        return datetime.datetime.combine(_DATE.deserialize(value), datetime.time())


def dump_datetime(value):
    if value is None:
        return None
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, datetime.time())
    return _DATETIME.serialize('value', {'value': value})


def register_builtin_formats(registry: FormatRegistry):
    registry.register('date', load=load_date, dump=dump_date)
    registry.register('date-time', load=load_datetime, dump=dump_datetime)
    return registry


#: The process-wide registry, shared by every model which does not set its own.
formats = register_builtin_formats(FormatRegistry())
