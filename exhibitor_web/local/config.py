import io
import os
import logging
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

from dotenv import dotenv_values

from exhibitor_web import settings

log = logging.getLogger(__name__)


class PropertySource(Mapping[str, str]):
    """
    An immutable, named snapshot of key/value properties.

    The bootstrap never reads ambient process state directly; the live
    environment is captured once with `from_environ()` and passed around as a
    value, so tests can inject any source they like.
    """

    def __init__(self, name: str, values: Optional[Mapping[str, str]] = None) -> None:
        self.name = name
        self._values: Dict[str, str] = dict(values or {})

    @classmethod
    def from_environ(cls) -> "PropertySource":
        """Snapshots the current process environment."""
        return cls("environment", os.environ)

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"PropertySource({self.name!r}, {len(self._values)} properties)"


class PropertySourceReader:
    """
    Merges the bundled properties resource with a live property source.

    It follows a clear precedence:
    1. Values from the live source, visible as defaults.
    2. Values from the bundled `exhibitor.properties` resource.
    3. The live source again, so it wins for every key it defines.
    """

    def __init__(self, resource_path: Optional[Path] = None, source: Optional[PropertySource] = None) -> None:
        self.resource_path: Path = Path(resource_path) if resource_path else settings.PROPERTIES_PATH
        self.source = source if source is not None else PropertySource.from_environ()

    def load(self) -> Dict[str, str]:
        """
        Produces the merged, insertion-ordered property view.

        A missing or unreadable resource never fails the load; the live
        source alone is enough to configure the supervisor.

        :return: A dictionary of property names and values.
        """
        merged: Dict[str, str] = dict(self.source)
        merged.update(self._read_resource())
        merged.update(self.source)
        return merged

    def _read_resource(self) -> Dict[str, str]:
        """Parses the bundled resource, returning an empty mapping when it is absent or broken."""
        if not self.resource_path.is_file():
            log.warning(f"Could not find {self.resource_path.name}")
            return {}

        try:
            text = self.resource_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            log.error(f"Could not load {self.resource_path.name}: {e}", exc_info=True)
            return {}

        parsed = dotenv_values(stream=io.StringIO(text), interpolate=False)
        log.debug(f"Loaded {len(parsed)} properties from '{self.resource_path}'")
        # A bare key with no '=' is an empty property, not a missing one.
        return {key: value if value is not None else "" for key, value in parsed.items()}
