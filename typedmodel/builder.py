"""
Builds model instances out of plain data.

The builder walks the props of a model, not the data: for each prop, the
input value (or the default) is converted according to the prop's kind.
Arrays are converted item by item, inline objects and nested models
recursively, strings with a format through the format registry.

Every step knows where it is in the data, as a path like `$.items[2].name`.
If a step fails, the error is wrapped in a `BuildError` carrying that path.
Because the innermost step wraps it first, the path points to where the
failure happened, not to some parent of it.
"""

from collections.abc import Mapping

from typedmodel.errors import BuildError, SchemaError
from typedmodel.props import Missing, ARRAY, OBJECT, MODEL, SELF
from typedmodel.schema import accepts_any
from typedmodel.utils import item_path, key_path


class Builder:

    def __init__(self, formats):
        self.formats = formats

    def build(self, model_cls, values, path='$'):
        """Return a new instance of `model_cls` built from `values`."""
        return self._build_model(model_cls, values, path, frozenset())

    def build_values(self, model_cls, values, path='$'):
        """Return the dict of converted values an instance of `model_cls`
        would hold, including defaults.
        """
        return self._build_values(model_cls, values, path, frozenset())

    def set_values(self, instance, values, path='$'):
        """Convert the given values and assign them to `instance`.

        Unlike building, this only touches the props present in `values`;
        missing props are left alone, and no defaults are applied.
        """
        model_cls = type(instance)
        values = values or {}

        if accepts_any(model_cls):
            processed = dict(values)
        else:
            processed = {}
            for name, prop in model_cls.all_props().items():
                if prop.read_only or values.get(name, Missing) is Missing:
                    continue
                processed[name] = self.build_value(
                    key_path(path, name), prop, values[name], model_cls, frozenset())

        for name, value in processed.items():
            setattr(instance, name, value)
        return instance

    def _build_model(self, model_cls, values, path, defaulted):
        instance = model_cls.__new__(model_cls)
        vars(instance).update(self._build_values(model_cls, values, path, defaulted))
        return instance

    def _build_values(self, model_cls, values, path, defaulted):
        if values is None:
            values = {}
        elif hasattr(type(values), '__typed_props__'):
            # Never share a nested instance; build a fresh one from its data.
            values = values.to_dict()
        if not isinstance(values, Mapping):
            raise TypeError(f'{model_cls.__name__} must be built from an object, got: {values!r}')

        if accepts_any(model_cls):
            return {key: value for key, value in values.items() if value is not Missing}

        return self.build_object(path, model_cls.all_props(), values, model_cls, defaulted)

    def build_object(self, path, props, values, owner, defaulted):
        if not isinstance(values, Mapping):
            raise TypeError(f'Expected an object, got: {values!r}')

        result = {}
        for name, prop in props.items():
            # We never write read-only props.
            if prop.read_only:
                continue
            value = self.build_value(
                key_path(path, name), prop, values.get(name, Missing), owner, defaulted)
            if value is not Missing:
                result[name] = value
        return result

    def build_value(self, path, prop, value, owner, defaulted):
        try:
            from_default = False
            if value is Missing:
                value = prop.get_default()
                from_default = value is not Missing

            if prop.kind == ARRAY:
                if value is Missing:
                    return []
                if value is None:
                    return None
                return self.build_array(path, prop, value, owner, defaulted)

            if value is Missing or value is None:
                return value

            if prop.kind == OBJECT:
                if prop.properties is None:
                    return dict(value)
                return self.build_object(path, prop.properties, value, owner, defaulted)

            if prop.kind in (MODEL, SELF):
                target = prop.resolve(owner)
                if from_default:
                    if target in defaulted:
                        raise SchemaError(
                            f'The default of {path} creates another {target.__name__} '
                            f'with a default, which would never end')
                    defaulted = defaulted | {target}
                return self._build_model(target, value, path, defaulted)

            if prop.is_string and prop.format:
                return self.formats.load_value(prop.format, value)

            return value

        except BuildError:
            raise
        except Exception as exc:
            raise BuildError(path, exc) from exc

    def build_array(self, path, prop, values, owner, defaulted):
        if isinstance(values, (str, bytes, Mapping)):
            raise TypeError(f'Expected an array, got: {values!r}')
        if prop.items is None:
            return list(values)
        return [
            self.build_value(item_path(path, idx), prop.items, item, owner, defaulted)
            for idx, item in enumerate(values)
        ]
