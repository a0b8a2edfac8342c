# risk_analyzer/utils/ratelimit.py
import time, random, threading
from collections import deque
from typing import Optional

import requests

# Default QPS (requests per second) for explorer APIs.
DEFAULT_QPS = 4.0

RETRYABLE_STATUS = (429, 500, 502, 503, 504)

# One limiter per "host key" (e.g., 'etherscan_v2', 'goplus')
_LIMITERS = {}
_LOCK = threading.Lock()


class RateLimiter:
    def __init__(self, max_per_sec: float):
        self.max_per_sec = max(0.1, float(max_per_sec))
        self.window = deque()
        self.lock = threading.Lock()

    def wait(self):
        with self.lock:
            now = time.monotonic()
            # drop timestamps older than 1s
            while self.window and now - self.window[0] > 1.0:
                self.window.popleft()

            if len(self.window) >= self.max_per_sec:
                # sleep until we drop under the limit
                sleep_for = 1.0 - (now - self.window[0]) + 0.001
                if sleep_for > 0:
                    time.sleep(sleep_for)
                now = time.monotonic()
                while self.window and now - self.window[0] > 1.0:
                    self.window.popleft()

            self.window.append(time.monotonic())


def _get_limiter(host_key: str, max_qps: Optional[float]) -> RateLimiter:
    with _LOCK:
        qps = DEFAULT_QPS if max_qps is None else float(max_qps)
        lim = _LIMITERS.get(host_key)
        if lim is None or lim.max_per_sec != max(0.1, qps):
            lim = RateLimiter(qps)
            _LIMITERS[host_key] = lim
        return lim


def http_get_json(
    host_key: str,
    url: str,
    params: dict,
    max_qps: Optional[float] = None,
    timeout: int = 15,
    retries: int = 0,
) -> dict:
    """
    GET with per-host rate limiting. Returns response.json() or raises.
    `retries` extra attempts on 429/5xx/transport errors with jittered backoff;
    the default is a single attempt.
    """
    lim = _get_limiter(host_key, max_qps)
    backoff = 0.5
    for attempt in range(retries + 1):
        last = attempt == retries
        lim.wait()
        try:
            resp = requests.get(url, params=params, timeout=timeout)
        except requests.RequestException:
            if last:
                raise
            time.sleep(backoff + random.uniform(0, 0.2))
            backoff = min(backoff * 2, 4.0)
            continue

        if resp.status_code in RETRYABLE_STATUS and not last:
            time.sleep(backoff + random.uniform(0, 0.2))
            backoff = min(backoff * 2, 4.0)
            continue
        resp.raise_for_status()
        return resp.json()
    raise RuntimeError("unreachable")
