# feedback/services/rate_limiter.py
import threading
import time


class TokenBucket:
    """
    Non-blocking token bucket shared by every caller in the process.

    Refills at `rate` tokens per second up to `burst`. `allow()` either
    takes a token or says no; callers are never queued. One busy client can
    drain the burst for everybody else.
    """

    def __init__(self, rate: float, burst: int, clock=time.monotonic) -> None:
        if rate <= 0 or burst < 1:
            raise ValueError("rate must be > 0 and burst >= 1")
        self._rate = float(rate)
        self._burst = float(burst)
        self._clock = clock
        self._tokens = float(burst)
        self._last = clock()
        self._lock = threading.Lock()

    def _refill(self, now: float) -> None:
        elapsed = max(0.0, now - self._last)
        self._tokens = min(self._burst, self._tokens + elapsed * self._rate)
        self._last = now

    def allow(self) -> bool:
        with self._lock:
            self._refill(self._clock())
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            return False

    def available(self) -> float:
        with self._lock:
            self._refill(self._clock())
            return self._tokens
