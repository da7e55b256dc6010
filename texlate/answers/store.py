"""
Answer storage for texlate.
Holds the answers given to a template's questions and persists them as a
flat JSON object so a later run can replay them as defaults.
"""
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from ..constants import TEMPLATE_KEY
from ..exceptions import ConfigurationError, OutputWriteError, ValuesFileError

logger = logging.getLogger(__name__)


class AnswerStore:
    """
    String to string mapping of answers, keyed by question key.

    The store is both the source of prompt defaults and the state that gets
    persisted once the template has been executed.
    """

    def __init__(self, values: Optional[Dict[str, str]] = None) -> None:
        self._values: Dict[str, str] = {}
        if values:
            for key, value in values.items():
                self.set(key, value)

    @classmethod
    def for_template(cls, template_path: Union[str, Path]) -> 'AnswerStore':
        """Create a fresh store that remembers which template it belongs to."""
        store = cls()
        store.set(TEMPLATE_KEY, str(template_path))
        return store

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'AnswerStore':
        """
        Load a store from a values file.

        Raises:
            ConfigurationError: If the file cannot be read
            ValuesFileError: If the file content is not a flat string object
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ConfigurationError(f"Cannot read values file '{path}': {e}") from e

        store = cls()
        store.load(data)
        logger.debug(f"Loaded {len(store)} answers from {path}")
        return store

    def get(self, key: str) -> str:
        """Return the stored answer, or an empty string when there is none."""
        return self._values.get(key, "")

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite an answer."""
        self._values[str(key)] = str(value)

    def template_origin(self) -> Optional[str]:
        """Return the template path recorded in the store, if any."""
        return self._values.get(TEMPLATE_KEY)

    def load(self, data: Union[bytes, str]) -> None:
        """
        Replace the store content with a serialized JSON object.

        The store is left untouched when the data is malformed.

        Args:
            data: JSON text or UTF-8 encoded bytes

        Raises:
            ValuesFileError: If the data is not a flat string to string object
        """
        try:
            parsed = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValuesFileError(f"Malformed values file: {e}") from e

        if not isinstance(parsed, dict):
            raise ValuesFileError(
                f"Malformed values file: expected an object, got {type(parsed).__name__}"
            )

        for key, value in parsed.items():
            if not isinstance(value, str):
                raise ValuesFileError(
                    f"Malformed values file: value for '{key}' is "
                    f"{type(value).__name__}, expected string"
                )

        self._values = dict(parsed)

    def save(self) -> bytes:
        """Serialize the store to a flat JSON object."""
        return json.dumps(self._values, ensure_ascii=False).encode("utf-8")

    def write_file(self, path: Union[str, Path]) -> Path:
        """
        Write the serialized store to a file atomically.

        Args:
            path: Destination file path

        Returns:
            The path that was written

        Raises:
            OutputWriteError: If the file cannot be written
        """
        path = Path(path)
        data = self.save()
        tmp_name = ""
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise OutputWriteError(f"Failed to write values file '{path}': {e}") from e

        logger.debug(f"Saved {len(self)} answers to {path}")
        return path

    def as_dict(self) -> Dict[str, str]:
        """Return a copy of the stored answers."""
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AnswerStore):
            return self._values == other._values
        if isinstance(other, dict):
            return self._values == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"AnswerStore({self._values!r})"
