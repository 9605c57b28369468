# OOP boundary for external i/o
# all http details live here, so providers only deal with dicts of known shape
# use a thread-local session per aggregator worker thread

from __future__ import annotations
import threading
from typing import Any, Dict, Optional
import requests

class ProviderError(RuntimeError):
    # single error type used to propagate clear messages from the provider layer
    pass

class JSONClient:
    # this class encapsulates transport details like timeout, headers and sessions
    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "multi-weather/0.1",
    ):
        self.timeout = timeout
        self.user_agent = user_agent

        # each worker thread lazily obtains its own session through _session()
        self._local = threading.local()

    def _build_session(self) -> requests.Session:
        # central place to configure http behavior like headers
        s = requests.Session()
        s.headers.update({"User-Agent": self.user_agent})
        return s

    def _session(self) -> requests.Session:
        # thread-local session creation
        sess = getattr(self._local, "session", None)
        if sess is None:
            sess = self._build_session()
            self._local.session = sess
        return sess

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None, what: str = "") -> Any:
        # what is a short label for error messages, usually the city being looked up
        label = what or url
        try:
            resp = self._session().get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            # wrap requests exceptions with context for easier debugging
            raise ProviderError(f"Request error for {label!r}: {exc}") from exc

        if resp.status_code >= 400:
            # include a short response snippet to speed up triage
            snippet = (resp.text or "")[:300]
            raise ProviderError(f"HTTP {resp.status_code} for {label!r}. Body: {snippet}")

        try:
            return resp.json()
        except ValueError as exc:
            raise ProviderError(f"Invalid JSON for {label!r}: {exc}") from exc
