import marshmallow


class TypedModelError(Exception):
    pass


class SchemaError(TypedModelError):
    """
    A model declaration is invalid, or cannot be resolved (for example an
    unknown named `$ref`).
    """


class ValidationError(TypedModelError, marshmallow.ValidationError):
    """
    The input given to a model did not pass the derived JSON schema.

    `errors` is the list returned by the validator, unchanged. `messages`
    holds one readable line per error, and `data` is the rejected input.
    """

    typename = 'validationError'

    def __init__(self, errors, data=None):
        self.errors = list(errors)
        messages = [format_error(error) for error in self.errors]
        marshmallow.ValidationError.__init__(self, messages, data=data)

    def to_json(self):
        return {
            'type': self.typename,
            'errors': self.messages,
        }


class BuildError(TypedModelError):
    """
    Building a value failed. `path` points to the most nested location
    where it happened, for example `$.items[2].dynamic`, and `error` is the
    original exception (also available as `__cause__`).
    """

    def __init__(self, path, error):
        super().__init__(f'{path}: {error}')
        self.path = path
        self.error = error


def format_error(error):
    path = getattr(error, 'json_path', None)
    message = getattr(error, 'message', None) or str(error)
    if path:
        return f'{path}: {message}'
    return message
