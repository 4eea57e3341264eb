"""
Durable key/value storage for the login session.

The token and user snapshot survive a browser reload or a Streamlit
restart by living in a small JSON file. In the app every browser gets its
own file, named by a random id carried in the page URL.
"""
import json
import re
import secrets
import logging
from pathlib import Path
from typing import Any, Dict, MutableMapping, Optional, Union

logger = logging.getLogger("SESSION_STORAGE")


class InMemoryStorage:
    """Process-local storage, for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStorage:
    """
    Storage backed by a JSON object on disk.

    Every write rewrites the whole file. An unreadable file is treated as
    empty.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self._read().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


BROWSER_ID_PARAM = "sid"
BROWSER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{32,64}$")


def new_browser_id() -> str:
    return secrets.token_urlsafe(32)


def is_browser_id(value: Any) -> bool:
    return isinstance(value, str) and BROWSER_ID_PATTERN.match(value) is not None


def browser_id_from(params: MutableMapping[str, Any]) -> str:
    """
    The browser's session id, read from ``params`` (``st.query_params``).

    A missing or malformed id is replaced by a fresh one, written back to
    ``params`` so the next rerun and a page reload see the same id.
    """
    value = params.get(BROWSER_ID_PARAM)
    if is_browser_id(value):
        return value
    if value is not None:
        logger.warning("Ignoring malformed browser session id")
    browser_id = new_browser_id()
    params[BROWSER_ID_PARAM] = browser_id
    return browser_id


class BrowserSessionStorage(JsonFileStorage):
    """
    One JSON file per browser under ``directory``.

    Each browser only ever reads the file named by its own id, so one
    visitor's login never restores into another visitor's session.
    """

    def __init__(self, directory: Union[str, Path], browser_id: str):
        if not is_browser_id(browser_id):
            raise ValueError("Invalid browser session id")
        self.browser_id = browser_id
        super().__init__(Path(directory).expanduser() / f"{browser_id}.json")

    def remove(self, key: str) -> None:
        super().remove(key)
        if self.path.exists() and not self._read():
            self.path.unlink()
