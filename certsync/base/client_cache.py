"""
Service instance cache.

Lambda keeps the process warm between invocations; caching service
instances (and the boto3 clients they hold) avoids rebuilding them for
every notification batch. Only service instances live here; no
certificate, zone or record data is cached across invocations.
"""

from __future__ import annotations

import hashlib
import json
import threading
from typing import Any, Callable


class ClientCache:
    """Thread-safe, in-process cache for service instances keyed by service + config hash."""

    _instance: ClientCache | None = None
    _cache: dict[str, Any]
    _lock: threading.Lock

    def __new__(cls) -> ClientCache:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._cache = {}
            cls._instance._lock = threading.Lock()
        return cls._instance

    @staticmethod
    def _make_key(service_name: str, config: dict) -> str:
        """Produce a deterministic cache key from service and config."""
        # Sort keys so dict ordering doesn't affect the hash.
        serialised = json.dumps(
            {"service": service_name, "config": config},
            sort_keys=True,
            default=str,
        )
        return hashlib.sha256(serialised.encode()).hexdigest()

    def get_or_create(
        self,
        service_name: str,
        config: dict,
        factory: Callable[[dict], Any],
    ) -> Any:
        """Return a cached service instance or create one via *factory*.

        Args:
            service_name: Service name (e.g. 'dns').
            config: Configuration dict.
            factory: Callable(config) that creates a new service instance.

        Returns:
            The cached (or newly-created) service instance.
        """
        key = self._make_key(service_name, config)
        with self._lock:
            if key not in self._cache:
                self._cache[key] = factory(config)
            return self._cache[key]

    def clear(self) -> None:
        """Flush all cached service instances."""
        with self._lock:
            self._cache.clear()
