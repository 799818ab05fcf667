"""Import code generators and suite definition modules by name.

A suite module is ordinary Python exposing a ``SUITES`` list of
``(name, cases)`` pairs, for example::

    SUITES = [
        ("booleans", [("#t", "string", "#t\\n"), ("#f", "string", "#f\\n")]),
    ]
"""

import importlib
import importlib.util
import os

from .errors import LoaderError


def _import(module_name):
    if module_name.endswith(".py") or os.sep in module_name:
        path = os.path.abspath(module_name)
        name = os.path.splitext(os.path.basename(path))[0]
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise LoaderError(f"cannot load suite file {module_name}")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except FileNotFoundError as e:
            raise LoaderError(f"cannot load suite file {module_name}: {e}") from e
        return module
    try:
        return importlib.import_module(module_name)
    except ImportError as e:
        raise LoaderError(f"cannot import {module_name}: {e}") from e


def load_generator(target):
    """Resolve ``"package.module:function"`` to the generator callable."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise LoaderError(f"generator must look like module:function, got {target!r}")
    module = _import(module_name)
    try:
        generator = getattr(module, attr)
    except AttributeError as e:
        raise LoaderError(f"{module_name} has no attribute {attr!r}") from e
    if not callable(generator):
        raise LoaderError(f"{target} is not callable")
    return generator


def load_suites(registry, module_names):
    """Register the SUITES of every module, in the order given."""
    for module_name in module_names:
        module = _import(module_name)
        suites = getattr(module, "SUITES", None)
        if suites is None:
            raise LoaderError(f"{module_name} does not define SUITES")
        registry.extend(suites)
    return registry
