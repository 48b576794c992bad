"""Key/value settings stores used to persist tracing parameters.

A store holds typed values (int, float, bool) under string keys. The try-get
methods return None when a key is absent and raise SettingTypeError when the
key is present but holds a value of another type, so callers can tell the
two cases apart.
"""

import json
from pathlib import Path
from typing import Any

from vectorize.exceptions import SettingsStoreError, SettingTypeError


class SettingsStore:
    """In-memory settings store and base class for persistent stores."""

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def keys(self) -> list[str]:
        return list(self._values)

    def try_get_int(self, key: str) -> int | None:
        """Get an integer value.

        Args:
            key: Setting name

        Returns:
            The stored integer, or None if the key is absent

        Raises:
            SettingTypeError: If the stored value is not an integer
        """
        if key not in self._values:
            return None
        value = self._values[key]
        if isinstance(value, bool) or not isinstance(value, int):
            raise SettingTypeError(key, "int", value)
        return value

    def try_get_float(self, key: str) -> float | None:
        """Get a floating point value; integers are accepted and widened.

        Raises:
            SettingTypeError: If the stored value is not a number
        """
        if key not in self._values:
            return None
        value = self._values[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SettingTypeError(key, "float", value)
        return float(value)

    def try_get_bool(self, key: str) -> bool | None:
        """Get a boolean value.

        Raises:
            SettingTypeError: If the stored value is not a boolean
        """
        if key not in self._values:
            return None
        value = self._values[key]
        if not isinstance(value, bool):
            raise SettingTypeError(key, "bool", value)
        return value

    def set_int(self, key: str, value: int) -> None:
        self._values[key] = int(value)

    def set_float(self, key: str, value: float) -> None:
        self._values[key] = float(value)

    def set_bool(self, key: str, value: bool) -> None:
        self._values[key] = bool(value)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._values)


class JsonSettingsStore(SettingsStore):
    """Settings store backed by a JSON file.

    Example:
        store = JsonSettingsStore(Path("vectorize.json"))
        store.load()
        params.load_from(store)
        ...
        params.save_to(store)
        store.save()
    """

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the JSON file (need not exist yet)
        """
        super().__init__()
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> None:
        """Read the file; a missing file yields an empty store.

        Raises:
            SettingsStoreError: If the file cannot be read or is not a JSON object
        """
        if not self._path.exists():
            self._values = {}
            return

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsStoreError(str(self._path), str(e)) from e

        if not isinstance(data, dict):
            raise SettingsStoreError(str(self._path), "top-level value is not an object")
        self._values = data

    def save(self) -> None:
        """Write the store to its file.

        Raises:
            SettingsStoreError: If the file cannot be written
        """
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(self._values, indent=2, sort_keys=True), encoding="utf-8"
            )
        except OSError as e:
            raise SettingsStoreError(str(self._path), str(e)) from e

    def __enter__(self) -> "JsonSettingsStore":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit; saves only when the block succeeded."""
        if exc_type is None:
            self.save()
