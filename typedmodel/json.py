import datetime
from json import JSONEncoder


class TypedModelJSONEncoder(JSONEncoder):
    """Also encodes models, and dates found in untyped data."""

    def default(self, obj):
        if hasattr(type(obj), '__typed_props__'):
            return obj.to_dict()
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        return JSONEncoder.default(self, obj)
