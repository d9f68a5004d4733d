from collections.abc import Mapping
import inspect


def get_input_arguments(kwargs, function):
    """Return subset of keyword arguments in kwargs dict
    that are valid parameters to a function or method.

    Parameters
    ----------
    kwargs : dict (parameter names, values)
    function : function of class method

    Returns
    -------
    input_kwargs : dict
    """
    params = inspect.signature(function).parameters
    return {k: v for k, v in kwargs.items() if k in params}


def update(d, u):
    """Recursively update a dictionary of varying depth
    d with items from u.
    from: https://stackoverflow.com/questions/3232943/update-value-of-a-nested-dictionary-of-varying-depth
    """
    for k, v in u.items():
        if isinstance(v, Mapping) and isinstance(d.get(k), Mapping):
            d[k] = update(d[k], v)
        elif isinstance(v, Mapping):
            d[k] = update({}, v)
        else:
            d[k] = v
    return d
