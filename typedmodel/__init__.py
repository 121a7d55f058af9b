"""This is a model system driven by JSON schema declarations.

Here is what we need from it
----------------------------

1) Models should be declared the way their data is documented: as a JSON
   schema. The same declaration is used to build instances, to serialize
   them, and to publish the schema itself.

2) We need to be able to take unstructured, untrusted data, validate it,
   and convert it into those objects, including nested models, arrays of
   models and recursive structures such as trees.

In addition:

3) Some values are richer in Python than in JSON - dates, for example.
   A string property can declare a `format`, and the registered converter
   for that format is used in both directions.

4) Some properties are never taken from the input: they are `readOnly`,
   usually computed from the other values by a Python `@property`.


How it fits together
--------------------

`props` declares the properties of a model as plain dicts. When the class
is created, they are normalized (`typedmodel.props`) and merged with the
props inherited from the base classes (`typedmodel.schema`). A subclass can
remove an inherited prop by setting it to `Missing`.

Creating an instance validates the input against the derived schema using
`jsonschema`, then builds the values (`typedmodel.builder`): defaults are
applied, nested models instantiated, formats loaded. A failure while
building raises a `BuildError` whose `path` says where exactly it happened,
for example `$.items[2].dynamic`.

`to_dict()` and `to_json()` go the other way (`typedmodel.serializer`).
Properties which were never given and have no default are left out of the
output, rather than being output as `None`; `Missing` and `None` are two
different things throughout.
"""


from .errors import TypedModelError, SchemaError, ValidationError, BuildError
from .formats import Format, FormatRegistry, formats
from .model import TypedModel, is_model, is_model_class, get_model
from .props import Missing
from .schema import SCHEMA_URI
