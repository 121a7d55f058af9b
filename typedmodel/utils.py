def get_set_attrs(instance):
    """
    Return only those attributes which have been set on the instance.
    Properties which were never given, and had no default, are not in here.
    """
    return dict(vars(instance))


def item_path(path, index):
    return f'{path}[{index}]'


def key_path(path, key):
    return f'{path}.{key}'
