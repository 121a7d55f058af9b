"""
Normalized property declarations.

Models declare their properties as plain JSONSchema-like dicts:

    props = {
        'name': {'type': 'string', 'default': 'John'},
        'tags': {'type': 'array', 'items': {'type': 'string'}},
        'owner': {'type': User},
        'children': {'type': 'array', 'items': {'$ref': '#'}},
    }

When the model class is created, every declaration is turned into a `Prop`,
which records which kind of value it describes. The builder, serializer and
schema code switch on `Prop.kind` rather than inspecting the declaration
again each time.
"""

import copy
from typing import Any, Dict, Optional, Tuple

import attr
import marshmallow

from typedmodel.errors import SchemaError


# Used both for "this value was not given" and, in a model's `props`, for
# "remove this inherited property".
Missing = marshmallow.missing


PRIMITIVE = 'primitive'
ARRAY = 'array'
OBJECT = 'object'
MODEL = 'model'
SELF = 'self'

PRIMITIVE_TYPES = frozenset(['string', 'number', 'integer', 'boolean', 'null'])

SELF_REF = '#'


@attr.s(frozen=True)
class Prop:
    #: The declaration, exactly as it was given.
    schema: Dict[str, Any] = attr.ib(repr=False)
    kind: str = attr.ib()
    #: For primitives, the JSONSchema type names.
    types: Tuple[str, ...] = attr.ib(default=())
    #: For `model`, a model class or the name of one.
    target: Any = attr.ib(default=None)
    items: Optional['Prop'] = attr.ib(default=None)
    properties: Optional[Dict[str, 'Prop']] = attr.ib(default=None)
    default: Any = attr.ib(default=Missing)
    read_only: bool = attr.ib(default=False)
    format: Optional[str] = attr.ib(default=None)

    @property
    def is_string(self):
        return self.kind == PRIMITIVE and 'string' in self.types

    def get_default(self):
        """Return the default value, calling it if it is a producer.

        Literal defaults are copied, so instances never share them.
        """
        if callable(self.default):
            return self.default()
        return copy.deepcopy(self.default)

    def resolve(self, owner):
        """Return the model class the value of this prop is an instance of.

        `owner` is the model the prop belongs to, which is what a `$ref`
        to `#` points to.
        """
        if self.kind == SELF:
            return owner
        if isinstance(self.target, str):
            from typedmodel.model import get_model
            return get_model(self.target)
        return self.target


def declares_props(klass):
    return isinstance(klass, type) and hasattr(klass, '__typed_props__')


def make_prop(schema, name='') -> Prop:
    if not isinstance(schema, dict):
        raise SchemaError(f'Property "{name}" must be declared with a dict, got: {schema!r}')

    common = {
        'schema': schema,
        'default': schema.get('default', Missing),
        'read_only': bool(schema.get('readOnly', False)),
        'format': schema.get('format'),
    }
    type_ = schema.get('type')

    if type_ is None and '$ref' in schema:
        ref = schema['$ref']
        if ref == SELF_REF:
            return Prop(kind=SELF, **common)
        if not isinstance(ref, str) or not ref:
            raise SchemaError(f'Property "{name}" has an invalid $ref: {ref!r}')
        return Prop(kind=MODEL, target=ref, **common)

    if isinstance(type_, type):
        if not declares_props(type_):
            raise SchemaError(f'Property "{name}" has type {type_.__name__}, which is not a model')
        return Prop(kind=MODEL, target=type_, **common)

    if type_ == 'array':
        items = schema.get('items')
        return Prop(
            kind=ARRAY,
            items=make_prop(items, f'{name}[]') if items is not None else None,
            **common
        )

    if type_ == 'object':
        properties = schema.get('properties')
        if properties is not None:
            properties = {
                key: make_prop(value, f'{name}.{key}')
                for key, value in properties.items()
            }
        return Prop(kind=OBJECT, properties=properties, **common)

    types = tuple(type_) if isinstance(type_, (list, tuple)) else (type_,)
    if type_ is None:
        # No type at all accepts anything.
        types = ()
    unknown = [t for t in types if t not in PRIMITIVE_TYPES]
    if unknown:
        raise SchemaError(f'Property "{name}" has an unknown type: {", ".join(map(repr, unknown))}')
    return Prop(kind=PRIMITIVE, types=types, **common)


def make_props(declared, model_name=''):
    """Normalize a model's `props`. `Missing` entries are kept as-is, they
    mark inherited properties to be removed.
    """
    result = {}
    for name, schema in (declared or {}).items():
        if schema is Missing:
            result[name] = Missing
        else:
            result[name] = make_prop(schema, f'{model_name}.{name}' if model_name else name)
    return result
