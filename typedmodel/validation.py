"""
Validating raw input against a derived schema.

The validation itself is done by `jsonschema`; we only decide which
validator to use and prepare the input. Anything with the same signature as
`validate()` can take its place.
"""

import datetime
import logging
from collections.abc import Mapping

from jsonschema import Draft202012Validator

from typedmodel.props import Missing


logger = logging.getLogger(__name__)


def make_validator(schema):
    return Draft202012Validator(schema)


def validate(data, schema, validator=None):
    """Return the list of errors found in `data`, sorted by location; an
    empty list means the data is valid.
    """
    if validator is None:
        validator = make_validator(schema)
    return sorted(validator.iter_errors(data), key=lambda error: error.json_path)


def jsonable(value):
    """Convert `value` into the form it would have in JSON, so it can be
    validated: nested models become dicts, dates become strings, and
    `Missing` entries are dropped.
    """
    if hasattr(type(value), '__typed_props__'):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {
            key: jsonable(item) for key, item in value.items()
            if item is not Missing
        }
    if isinstance(value, (list, tuple)):
        return [jsonable(item) for item in value]
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return value


class ValidatorCache:
    """Builds a validator for a model's expanded schema the first time it is
    needed, and keeps it.
    """

    def __init__(self):
        self.validators = {}

    def get(self, model_cls):
        validator = self.validators.get(model_cls)
        if validator is None:
            logger.debug('Building validator for %s', model_cls.__name__)
            validator = make_validator(model_cls.get_schema())
            self.validators[model_cls] = validator
        return validator

    def clear(self):
        self.validators.clear()


validators = ValidatorCache()
