"""
Converts model instances back into plain data: dicts, lists, strings,
numbers, booleans and None, ready to be given to `json.dumps()`.
"""

import json

from typedmodel.json import TypedModelJSONEncoder
from typedmodel.props import Missing, ARRAY, OBJECT, MODEL, SELF
from typedmodel.schema import accepts_any
from typedmodel.utils import get_set_attrs


class Serializer:

    def __init__(self, formats):
        self.formats = formats

    def to_dict(self, instance):
        model_cls = type(instance)
        if accepts_any(model_cls):
            return get_set_attrs(instance)

        result = {}
        for name, prop in model_cls.all_props().items():
            # Read-only props are usually getters, so this computes them.
            # Absent props read as `Missing`; errors in getters propagate.
            value = getattr(instance, name)
            # Not set and no default: it is not in the output either.
            if value is Missing:
                continue
            result[name] = self.dump_value(prop, value)
        return result

    def dump_value(self, prop, value):
        if value is None:
            return None

        if prop.kind == ARRAY:
            if prop.items is None:
                return list(value)
            return [self.dump_value(prop.items, item) for item in value]

        if prop.kind == OBJECT:
            if prop.properties is None:
                return dict(value)
            return {
                name: self.dump_value(sub, value[name])
                for name, sub in prop.properties.items()
                if value.get(name, Missing) is not Missing
            }

        if prop.kind in (MODEL, SELF):
            if hasattr(type(value), '__typed_props__'):
                return self.to_dict(value)
            # A plain dict was assigned in place of a model; use it as is.
            return value

        if prop.is_string and not isinstance(value, str):
            return self.formats.dump_value(prop.format, value)

        return value

    def to_json(self, instance, indent=None):
        separators = None if indent is not None else (',', ':')
        return json.dumps(
            self.to_dict(instance), indent=indent, separators=separators,
            cls=TypedModelJSONEncoder)
