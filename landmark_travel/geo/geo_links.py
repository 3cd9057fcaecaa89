"""
Short map link expansion.

Follows redirects on Google's short-link hosts so the long URL, which
usually embeds coordinates or a place name, can be parsed. Expansion is
best-effort: any failure leaves the input untouched.
"""

import time
from typing import Optional
from urllib.parse import urlunsplit

import requests

from ..config.logger_module import log_info, log_warning
from .geo_cache import TimeBoundedCache
from .geo_parser import parse_url


SHORT_MAPS_HOSTS = {"maps.app.goo.gl", "goo.gl", "g.co"}

# Hosts that only ever serve map links; the others also shorten unrelated URLs
MAPS_ONLY_HOSTS = {"maps.app.goo.gl"}


def is_short_maps_link(text: str) -> bool:
    """Check whether text is a short link that points at a map or place."""
    parts = parse_url(text.strip())
    if parts is None or parts.scheme.lower() not in ("http", "https"):
        return False

    host = (parts.hostname or "").lower()
    if host not in SHORT_MAPS_HOSTS:
        return False

    if host in MAPS_ONLY_HOSTS:
        return True

    path = parts.path.lower()
    return "/maps" in path or path.startswith("/kgs")


def short_link_key(text: str) -> str:
    """Normalise a short link for caching: lower-case scheme and host."""
    parts = parse_url(text.strip())
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path, parts.query, parts.fragment))


class LinkExpander:
    """
    Resolves short map links to their canonical long-form URL.

    Expansions are cached for a long time since a short link's target
    does not change. Redirects are followed one hop at a time so the whole
    chain shares a single deadline, and response bodies are never read.
    """

    def __init__(self,
                 session: Optional[requests.Session] = None,
                 cache: Optional[TimeBoundedCache] = None,
                 timeout: float = 10.0,
                 cache_ttl: float = 24 * 60 * 60):
        """
        Initialize the expander.

        Args:
            session: HTTP session used for the redirect fetch (left unmodified)
            cache: Cache of expansions keyed by short URL
            timeout: Seconds allowed for the fetch, redirects included
            cache_ttl: Lifetime of a cached expansion when no cache is given
        """
        self.timeout = timeout
        self._cache = cache if cache is not None else TimeBoundedCache(cache_ttl, name="short-links")
        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers.update({
                'User-Agent': 'LandmarkTravel/1.0'
            })
        self._session = session

    def close(self) -> None:
        """Close the HTTP session if this expander created it."""
        if self._owns_session:
            self._session.close()

    def _fetch_final_url(self, url: str) -> str:
        deadline = time.monotonic() + self.timeout
        response = self._session.get(
            url,
            allow_redirects=False,
            stream=True,
            timeout=self.timeout,
            headers={'Accept': 'text/html,application/xhtml+xml'}
        )
        hops = 0
        try:
            while response.is_redirect and response.next is not None:
                hops += 1
                if hops > self._session.max_redirects:
                    raise requests.exceptions.TooManyRedirects(
                        f"Exceeded {self._session.max_redirects} redirects."
                    )
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise requests.exceptions.Timeout(
                        f"Redirect chain exceeded {self.timeout}s."
                    )
                next_request = response.next
                response.close()
                response = self._session.send(
                    next_request,
                    allow_redirects=False,
                    stream=True,
                    timeout=remaining
                )

            if time.monotonic() > deadline:
                raise requests.exceptions.Timeout(f"Redirect chain exceeded {self.timeout}s.")
            return response.url
        finally:
            response.close()

    def maybe_expand(self, text: str) -> str:
        """
        Expand text if it is a known short map link.

        Args:
            text: Map link or free text

        Returns:
            The long URL, or the trimmed input when not applicable or on failure
        """
        trimmed = text.strip()
        if not is_short_maps_link(trimmed):
            return trimmed

        cache_key = short_link_key(trimmed)
        cached = self._cache.get(cache_key)
        if cached:
            return cached

        try:
            final_url = self._fetch_final_url(cache_key)
        except requests.exceptions.RequestException as e:
            log_warning(f"Could not expand short link {cache_key}: {e}")
            return trimmed

        final_url = final_url or trimmed
        self._cache.set(cache_key, final_url)
        log_info(f"Expanded {cache_key} -> {final_url}")
        return final_url
