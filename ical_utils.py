import logging
import time
from urllib.request import Request, urlopen

logger = logging.getLogger(__name__)

USER_AGENT = "ical-to-image/1.0"


class ConfigError(ValueError):
    pass


class FetchError(RuntimeError):
    pass


class Fetcher:
    """HTTP client with retries and a per-instance response cache.

    Create one per render call, or share one explicitly to pool downloads
    across calls.
    """

    def __init__(self, timeout=10, retries=3, delay=10, cache_ttl=None):
        self.timeout = timeout
        self.retries = max(1, retries)
        self.delay = delay
        self.cache_ttl = cache_ttl
        self._cache = {}

    @classmethod
    def from_config(cls, cfg):
        cfg = cfg or {}
        return cls(
            timeout=cfg.get("timeout", 10),
            retries=cfg.get("retries", 3),
            delay=cfg.get("delay", 10),
            cache_ttl=cfg.get("cache_ttl"),
        )

    def fetch_bytes(self, url):
        if self.cache_ttl:
            cached = self._cache.get(url)
            if cached:
                expires_at, data = cached
                if time.time() < expires_at:
                    logger.debug("cache hit for %s", url)
                    return data
        req = Request(url, headers={"User-Agent": USER_AGENT})
        for attempt in range(self.retries):
            try:
                with urlopen(req, timeout=self.timeout) as response:
                    data = response.read()
                    if not data:
                        raise ValueError("Empty response")
            except (OSError, ValueError) as exc:
                if attempt == self.retries - 1:
                    raise FetchError(f"could not fetch {url}: {exc}") from exc
                logger.warning("fetch of %s failed (%s), retrying in %ss", url, exc, self.delay)
                time.sleep(self.delay)
                continue
            if self.cache_ttl:
                self._cache[url] = (time.time() + self.cache_ttl, data)
            return data

    def fetch_text(self, url):
        return self.fetch_bytes(url).decode("utf-8", errors="ignore")


def text_size(draw, text, font):
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0], bbox[3] - bbox[1]


def line_height(draw, font):
    try:
        return sum(font.getmetrics())
    except AttributeError:
        return text_size(draw, "Ag", font)[1]


def truncate_text(draw, text, max_width, font):
    if text_size(draw, text, font)[0] <= max_width:
        return text
    if max_width <= 0:
        return ""
    ellipsis = "…"
    cut = text
    while cut and text_size(draw, cut + ellipsis, font)[0] > max_width:
        cut = cut[:-1]
    return cut + ellipsis if cut else ""


def wrap_text(draw, text, max_width, font):
    words = str(text).replace("\n", " ").split()
    if not words:
        return [""]
    lines = []
    current = words[0]
    for word in words[1:]:
        candidate = f"{current} {word}"
        if text_size(draw, candidate, font)[0] <= max_width:
            current = candidate
        else:
            lines.append(current)
            current = word
    lines.append(current)
    return [truncate_text(draw, line, max_width, font) for line in lines]
