import importlib
import logging
from typing import Any

log = logging.getLogger(__name__)


def load_object(target: str) -> Any:
    """
    Imports an object from a "module:attr" path, the same syntax Hypercorn uses for apps.

    :param target: e.g. "exhibitor_web.local.supervisor.creator:ExhibitorCreator".
    :return: The resolved attribute.
    :raises ValueError: If the path is empty or has no ':' separator.
    :raises ImportError: If the module or attribute does not exist.
    """
    module_name, sep, attr_path = (target or "").partition(":")
    if not module_name or not sep or not attr_path:
        raise ValueError(f"Expected a 'module:attr' path, got '{target}'.")

    obj: Any = importlib.import_module(module_name)
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ImportError(f"'{module_name}' has no attribute '{attr_path}'.") from e

    log.debug(f"Loaded '{target}'")
    return obj
