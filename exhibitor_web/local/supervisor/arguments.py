import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from exhibitor_web import settings

log = logging.getLogger(__name__)

REMOTE_AUTH_ARG = settings.ARG_NAME_FORMAT.format("remoteauth")
MASKED_VALUE = "****"


def to_arg_name(suffix: str) -> str:
    """Formats a property suffix as a CLI-style flag, e.g. 'configtype' -> '-configtype'."""
    return settings.ARG_NAME_FORMAT.format(suffix)


def translate(*sources: Mapping[str, str], prefix: str = settings.OUR_PREFIX) -> List[Tuple[str, str]]:
    """
    Turns prefixed properties into (flag, value) argument pairs.

    Every source is scanned in the order given. A flag produced by a later
    source replaces the value from an earlier one but keeps its position.

    :param sources: Property mappings to scan.
    :param prefix: Only keys starting with this prefix are translated.
    :return: The argument pairs in insertion order.
    """
    args: Dict[str, str] = {}
    for source in sources:
        for name, value in source.items():
            if not name.startswith(prefix):
                continue
            arg_name = to_arg_name(name[len(prefix):])
            args[arg_name] = value
            shown = MASKED_VALUE if arg_name == REMOTE_AUTH_ARG and value else value
            log.info(f"Setting property {arg_name}={shown}")
    return list(args.items())


def to_args_array(pairs: Sequence[Tuple[str, str]]) -> List[str]:
    """Flattens argument pairs into the token list the creator parses."""
    args: List[str] = []
    for arg_name, value in pairs:
        args.append(arg_name)
        args.append(value)
    return args


class ArgumentTranslator:
    """Holds the recognized prefix and exposes the translation steps together."""

    def __init__(self, prefix: str = settings.OUR_PREFIX) -> None:
        self.prefix = prefix

    def translate(self, *sources: Mapping[str, str]) -> List[Tuple[str, str]]:
        return translate(*sources, prefix=self.prefix)

    def property_name(self, arg_name: str) -> str:
        """Maps a flag back to the property that sets it, e.g. '-configtype' -> 'exhibitor-configtype'."""
        return self.prefix + arg_name.lstrip("-")

    @staticmethod
    def lookup(pairs: Sequence[Tuple[str, str]], arg_name: str) -> Optional[str]:
        return dict(pairs).get(arg_name)
