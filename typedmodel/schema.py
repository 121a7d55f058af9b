"""
Property inheritance and JSON schema derivation for model classes.
"""

from collections import OrderedDict

from typedmodel.props import Missing, ARRAY, OBJECT, MODEL


SCHEMA_URI = 'http://json-schema.org/schema#'


def model_ancestors(model_cls):
    """Return the model classes `model_cls` inherits from, root first, with
    `model_cls` itself last.
    """
    return [
        klass for klass in reversed(model_cls.__mro__)
        if '__typed_props__' in klass.__dict__
    ]


def effective_props(model_cls):
    """Merge the declared props of the whole inheritance chain.

    The farthest ancestor contributes first, so nearer declarations replace
    earlier ones of the same name. Props set to `Missing` are removed
    regardless of where they were declared.
    """
    merged = OrderedDict()
    for klass in model_ancestors(model_cls):
        merged.update(klass.__dict__['__typed_props__'])
    return OrderedDict(
        (name, prop) for name, prop in merged.items()
        if prop is not Missing
    )


def get_overrides(model_cls):
    return getattr(model_cls, 'schema', None) or {}


def accepts_any(model_cls):
    """A model without properties that does not forbid additional ones
    takes and returns whatever data it is given.
    """
    if model_cls.all_props():
        return False
    return get_overrides(model_cls).get('additionalProperties', False) is not False


def derive_schema(model_cls, expand_models=True):
    """Return the JSON schema document for `model_cls`.

    With `expand_models`, nested models are replaced by their own schema
    document. Otherwise, the props are included as they were declared, with
    model classes in place.
    """
    return _derive_schema(model_cls, expand_models, ())


def _derive_schema(model_cls, expand_models, stack):
    schema = {
        '$schema': SCHEMA_URI,
        '$id': model_cls.__name__,
        'type': 'object',
        'additionalProperties': False,
    }

    props = model_cls.all_props()
    if props:
        if expand_models:
            stack = stack + (model_cls,)
            schema['properties'] = {
                name: expand_prop(prop, model_cls, stack)
                for name, prop in props.items()
            }
        else:
            schema['properties'] = {
                name: prop.schema for name, prop in props.items()
            }

    schema.update(get_overrides(model_cls))
    return schema


def expand_prop(prop, owner, stack):
    if prop.kind == MODEL:
        target = prop.resolve(owner)
        if target in stack:
            # Already being expanded further up; point to its `$id`.
            return {'$ref': target.__name__}
        return _derive_schema(target, True, stack)

    # A default computed on build has no value to show.
    result = {
        key: value for key, value in prop.schema.items()
        if not (key == 'default' and callable(value))
    }

    if prop.kind == ARRAY and prop.items is not None:
        result['items'] = expand_prop(prop.items, owner, stack)

    elif prop.kind == OBJECT and prop.properties is not None:
        result['properties'] = {
            name: expand_prop(sub, owner, stack)
            for name, sub in prop.properties.items()
        }

    return result
