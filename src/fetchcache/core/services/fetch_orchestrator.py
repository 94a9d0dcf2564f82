"""Fetch orchestrator - read-through fetching with negative caching."""

import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from fetchcache.core.entities.cache_entry import ttl_seconds
from fetchcache.core.entities.fetch_state import FetchState
from fetchcache.core.errors import FetchError, HttpError, ParseError, SuppressedError
from fetchcache.core.interfaces.key_builder import IKeyBuilder
from fetchcache.core.interfaces.transport import ITransport, TransportResponse
from fetchcache.core.services.error_classifier import ErrorClassifier
from fetchcache.core.services.negative_cache import NegativeCache
from fetchcache.core.services.request_coalescer import RequestCoalescer
from fetchcache.infrastructure.key_builders.default import DefaultKeyBuilder
from fetchcache.infrastructure.stores.hybrid_store import HybridStore

logger = logging.getLogger(__name__)

Listener = Callable[[FetchState], None]

_MISSING = object()


@dataclass(frozen=True)
class FetchOutcome:
    """Result of one network round trip, shared by coalesced callers."""

    value: Any = None
    error: Exception | None = None
    final: bool = False


def parse_response(response: TransportResponse) -> Any:
    """Decode a successful response body.

    JSON is expected. A response explicitly labelled with a non-JSON
    content type is returned as text.

    Raises:
        ParseError: If the body cannot be decoded.
    """
    content_type = {k.lower(): v for k, v in response.headers.items()}.get(
        "content-type", ""
    )
    try:
        if content_type and "json" not in content_type:
            return response.body.decode("utf-8")
        return json.loads(response.body)
    except (ValueError, UnicodeDecodeError) as e:
        raise ParseError(f"Failed to parse response body: {e}") from e


def http_error_from_response(response: TransportResponse) -> HttpError:
    """Build an HttpError, taking the message from a JSON error body."""
    data: Any = None
    try:
        data = json.loads(response.body) if response.body else None
    except (ValueError, UnicodeDecodeError):
        data = None
    message = data.get("message") if isinstance(data, dict) else None
    return HttpError(response.status_code, message, data)


class FetchOrchestrator:
    """Controller a subscriber attaches to for one resource.

    On every activation the orchestrator decides, in order, whether a
    final failure record suppresses the request, whether a transient
    failure record suppresses it, whether a live cached value can be
    served, and only then issues the network call. Outcomes update the
    shared positive and negative caches and produce a new FetchState.

    Errors never propagate out of the orchestrator; subscribers observe
    them on ``state.error``. After ``close`` the orchestrator stops
    emitting, although a call already in flight still updates the
    shared caches.

    The TTL is not part of the cache key. An orchestrator that joins a
    call started by another orchestrator for the same key gets the value
    cached with the TTL of the one that started it.
    """

    def __init__(
        self,
        url: str,
        options: Mapping[str, Any] | None = None,
        ttl: timedelta | float | None = None,
        *,
        store: HybridStore,
        negative_cache: NegativeCache,
        transport: ITransport,
        key_builder: IKeyBuilder | None = None,
        classifier: ErrorClassifier | None = None,
        coalescer: RequestCoalescer[FetchOutcome] | None = None,
        durable_ttl: timedelta | float | None = None,
        parse: Callable[[TransportResponse], Any] = parse_response,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            url: The resource locator.
            options: Request options: ``method``, ``headers`` and ``body``
                are passed to the transport, all of them shape the key.
            ttl: Lifetime of fetched values in both stores. None uses the
                fast-store default and ``durable_ttl``.
            store: Positive cache.
            negative_cache: Failure memory.
            transport: HTTP primitive.
            key_builder: Builds the cache key, defaults to DefaultKeyBuilder.
            classifier: Error classifier.
            coalescer: Shares in-flight calls with other orchestrators.
                Without one, only calls within this instance are merged.
            durable_ttl: Durable-store TTL when ``ttl`` is None.
            parse: Decodes a 2xx response.
        """
        self._store = store
        self._negative = negative_cache
        self._transport = transport
        self._key_builder = key_builder or DefaultKeyBuilder()
        self._classifier = classifier or ErrorClassifier()
        self._coalescer = coalescer
        self._durable_ttl = durable_ttl
        self._parse = parse

        self._url = url
        self._options: dict[str, Any] = dict(options or {})
        self._ttl = self._validate_ttl(ttl)
        self._key = self._key_builder.build(url, self._options)

        self._state = FetchState()
        self._listeners: list[Listener] = []
        self._in_flight = False
        self._generation = 0
        self._closed = False

    @property
    def state(self) -> FetchState:
        """Current fetch state."""
        return self._state

    @property
    def key(self) -> str:
        return self._key

    @property
    def url(self) -> str:
        return self._url

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with every new state.

        Args:
            listener: Callable receiving the new FetchState.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def activate(self) -> FetchState:
        """Run the full decision sequence for the current key.

        Returns:
            The resulting state.
        """
        return await self._run(force=False)

    async def refetch(self) -> FetchState:
        """Re-run the full decision sequence.

        Unexpired failure records still suppress the network call.
        """
        return await self._run(force=False)

    async def force_refetch(self) -> FetchState:
        """Forget failures for the key and fetch from the network.

        Both negative records are deleted and the cache is bypassed, so
        exactly one network call is issued unless one is already in
        flight for this instance. A call started earlier by another
        orchestrator is not joined; later joiners share the forced one.
        """
        if self._closed:
            return self._state
        self._negative.clear(self._key)
        self._emit(
            self._state.evolve(error=None, is_final_error=False, has_attempted=False)
        )
        await self._fetch(force=True)
        return self._state

    async def update(
        self,
        url: str | None = None,
        options: Mapping[str, Any] | None = None,
        ttl: timedelta | float | None = None,
    ) -> FetchState:
        """Point the orchestrator at a new request and activate it.

        State belonging to the previous key is discarded when the key
        changes.
        """
        if url is not None:
            self._url = url
        if options is not None:
            self._options = dict(options)
        if ttl is not None:
            self._ttl = self._validate_ttl(ttl)

        key = self._key_builder.build(self._url, self._options)
        if key != self._key:
            self._key = key
            self._generation += 1
            self._in_flight = False
            self._emit(FetchState())
        return await self.activate()

    def close(self) -> None:
        """Tear down the subscription.

        Later state transitions, including those of a call already in
        flight, are discarded.
        """
        self._closed = True
        self._listeners.clear()

    async def __aenter__(self) -> "FetchOrchestrator":
        """Activate on entry."""
        await self.activate()
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        """Close on exit."""
        self.close()

    async def _run(self, force: bool) -> FetchState:
        if self._closed:
            return self._state
        key = self._key

        if not force:
            if self._negative.is_final(key):
                logger.debug("Final failure recorded for %s, not fetching", key)
                self._emit(
                    self._state.evolve(
                        loading=False,
                        error=self._state.error or SuppressedError(key, final=True),
                        is_final_error=True,
                    )
                )
                return self._state

            if self._negative.is_transient(key):
                logger.debug("Recent failure recorded for %s, not fetching", key)
                self._emit(
                    self._state.evolve(
                        loading=False,
                        error=self._state.error or SuppressedError(key),
                        is_final_error=False,
                    )
                )
                return self._state

            cached = self._store.get(key, _MISSING)
            if cached is not _MISSING:
                logger.debug("Cache hit for %s", key)
                self._emit(
                    self._state.evolve(
                        data=cached,
                        loading=False,
                        error=None,
                        is_final_error=False,
                    )
                )
                return self._state

        await self._fetch()
        return self._state

    async def _fetch(self, force: bool = False) -> None:
        if self._in_flight or self._closed:
            return
        self._in_flight = True
        generation = self._generation
        key, url, options, ttl = self._key, self._url, self._options, self._ttl

        self._emit(
            self._state.evolve(
                loading=True,
                error=None,
                is_final_error=False,
                has_attempted=True,
            )
        )

        try:
            if self._coalescer is not None:
                outcome = await self._coalescer.run(
                    key,
                    lambda: self._load(key, url, options, ttl),
                    replace=force,
                )
            else:
                outcome = await self._load(key, url, options, ttl)
        finally:
            if generation == self._generation:
                self._in_flight = False

        if self._closed or generation != self._generation:
            logger.debug("Discarding result for %s, subscriber moved on", key)
            return

        if outcome.error is not None:
            self._emit(
                self._state.evolve(
                    loading=False,
                    error=outcome.error,
                    is_final_error=outcome.final,
                )
            )
        else:
            self._emit(
                self._state.evolve(
                    data=outcome.value,
                    loading=False,
                    error=None,
                    is_final_error=False,
                )
            )

    async def _load(
        self,
        key: str,
        url: str,
        options: Mapping[str, Any],
        ttl: float | None,
    ) -> FetchOutcome:
        """Perform the network call and update the shared caches."""
        try:
            response = await self._transport.request(
                url,
                method=options.get("method", "GET"),
                headers=options.get("headers"),
                body=options.get("body"),
            )
            if not response.ok:
                raise http_error_from_response(response)
            value = self._parse(response)
        except FetchError as e:
            return self._record_failure(key, url, e)
        except Exception as e:
            logger.exception("Unexpected error fetching %s", url)
            return self._record_failure(key, url, e)

        self._negative.clear(key)
        durable_ttl = ttl if ttl is not None else self._durable_ttl
        self._store.set(key, value, ttl, durable_ttl)
        return FetchOutcome(value=value)

    def _record_failure(self, key: str, url: str, error: Exception) -> FetchOutcome:
        final = self._classifier.is_final(error)
        self._negative.record_failure(key, final=final)
        logger.warning("API fetch failed: %s (%s)", url, error)
        return FetchOutcome(error=error, final=final)

    def _emit(self, state: FetchState) -> None:
        if self._closed:
            return
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception("FetchState listener failed for %s", self._key)

    @staticmethod
    def _validate_ttl(ttl: timedelta | float | None) -> float | None:
        return None if ttl is None else ttl_seconds(ttl)
