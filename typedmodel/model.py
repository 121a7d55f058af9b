"""
The `TypedModel` base class.
"""

import logging
from typing import Any, Dict, List

from typedmodel.builder import Builder
from typedmodel.errors import SchemaError, ValidationError
from typedmodel.formats import formats as default_formats
from typedmodel.props import Missing, make_props
from typedmodel.schema import derive_schema, effective_props
from typedmodel.serializer import Serializer
from typedmodel.validation import jsonable, validate, validators


logger = logging.getLogger(__name__)


# All declared models, by class name and by full path (module and qualified
# name), so props can refer to models which are declared later:
# {'$ref': 'Order'} or {'$ref': 'shop.models.Order'}.
_registry: Dict[str, List[type]] = {}


def full_path(cls):
    return f'{cls.__module__}.{cls.__qualname__}'


def register_model(cls):
    for name in (cls.__name__, full_path(cls)):
        classes = _registry.setdefault(name, [])
        if cls not in classes:
            classes.append(cls)


def get_model(name):
    """Return the model class declared as `name`.

    A bare class name is ambiguous once two models share it; such models
    have to be referred to by their full path instead.
    """
    classes = _registry.get(name)
    if not classes:
        raise SchemaError(f'No model named "{name}" has been declared')
    if len(classes) > 1:
        paths = ', '.join(f'"{full_path(klass)}"' for klass in classes)
        raise SchemaError(
            f'Multiple models named "{name}" have been declared ({paths}); '
            f'refer to one of them by its full path')
    return classes[0]


class TypedModel:
    """Base class for models.

    Subclasses declare their properties in `props`, and may customize the
    derived JSON schema with `schema`:

        class User(TypedModel):
            props = {
                'name': {'type': 'string', 'default': 'John'},
                'surname': {'type': 'string', 'default': 'Doe'},
                'fullName': {'type': 'string', 'readOnly': True},
            }
            schema = {'required': ['name']}

            @property
            def fullName(self):
                return f'{self.name} {self.surname}'

    Props are inherited; a subclass may replace a prop by declaring it again,
    or remove it by setting it to `Missing`.
    """

    __typed_props__: Dict[str, Any] = {}

    props: Dict[str, Any] = {}
    schema: Dict[str, Any] = {}

    #: The string format registry used to build and serialize this model.
    formats = default_formats

    #: Validate the input against the schema before building.
    validate_input = True

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.__typed_props__ = make_props(cls.__dict__.get('props'), cls.__name__)
        cls.__all_props__ = effective_props(cls)
        register_model(cls)

    def __init__(self, values=None, **kwargs):
        values = {**(values or {}), **kwargs}
        cls = type(self)

        if cls.validate_input:
            errors = cls.validate(values)
            if errors:
                logger.debug('Rejected input for %s: %d error(s)', cls.__name__, len(errors))
                raise ValidationError(errors, data=values)

        vars(self).update(Builder(cls.formats).build_values(cls, values))

    def __getattr__(self, name):
        # Only called if normal lookup fails: declared props which were not
        # given (and have no default) read as `Missing`.
        if name.startswith('__') or name not in type(self).__all_props__:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")
        descriptor = getattr(type(self), name, None)
        if hasattr(descriptor, '__get__'):
            # A getter failed with an AttributeError of its own; raise it
            # again instead of reading as `Missing`.
            return descriptor.__get__(self, type(self))
        return Missing

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None

    def __repr__(self):
        values = ', '.join(f'{name}={value!r}' for name, value in vars(self).items())
        return f'{type(self).__name__}({values})'

    @classmethod
    def all_props(cls):
        """Return the props of this model, including inherited ones."""
        return dict(cls.__all_props__)

    @classmethod
    def get_schema(cls, leave_models=False):
        """Return the JSON schema of this model.

        With `leave_models`, nested models are not expanded into their
        schema; the props are returned as declared.
        """
        return derive_schema(cls, expand_models=not leave_models)

    @classmethod
    def validate(cls, values):
        """Validate `values` against the schema of this model. Returns `None`
        if they are valid, and the list of errors otherwise.
        """
        errors = validate(jsonable(values), None, validator=validators.get(cls))
        return errors or None

    @classmethod
    def dump(cls, values):
        """Build an instance from `values`, and convert it right back to
        plain data.
        """
        return cls(values).to_dict()

    def to_dict(self):
        return Serializer(type(self).formats).to_dict(self)

    def to_json(self, indent=None):
        return Serializer(type(self).formats).to_json(self, indent=indent)

    def set_values(self, values=None, **kwargs):
        """Update some of the values of this instance.

        Only the props given are touched, and no defaults are applied to
        the missing ones. Read-only and unknown props are ignored.
        """
        values = {**(values or {}), **kwargs}
        Builder(type(self).formats).set_values(self, values)
        return self


TypedModel.__all_props__ = {}


def is_model(obj):
    return isinstance(obj, TypedModel)


def is_model_class(klass):
    return isinstance(klass, type) and issubclass(klass, TypedModel) and klass is not TypedModel
