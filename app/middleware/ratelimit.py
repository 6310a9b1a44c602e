import time
import asyncio
from collections import deque
from typing import Callable, Iterable
from fastapi import Request
from app.errors import InvalidTokenError
from app.utils.responses import error_response
from app.utils.security import verify_token, ACCESS

class RateLimitMiddleware:
    def __init__(
        self,
        app,
        *,
        window_seconds: int,
        max_calls: int,
        key_func: Callable[[Request], str],
        include_path_prefixes: Iterable[str] = ("/api/auth/login", "/api/auth/register", "/api/auth/refresh"),
    ):
        self.app = app
        self.window = window_seconds
        self.max_calls = max_calls
        self.key_func = key_func
        self.include_paths = tuple(include_path_prefixes)

        self._buckets: dict[str, deque[float]] = {}
        self._lock = asyncio.Lock()
        self._last_sweep = 0.0

    def _should_guard(self, path: str) -> bool:
        return any(path.startswith(p) for p in self.include_paths)

    def _sweep(self, now: float) -> None:
        # drop clients idle for a whole window; runs at most once per window
        if now - self._last_sweep < self.window:
            return
        self._last_sweep = now
        cutoff = now - self.window
        stale = [key for key, q in self._buckets.items() if not q or q[-1] < cutoff]
        for key in stale:
            del self._buckets[key]

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        path = scope.get("path", "")
        if not self._should_guard(path):
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive)
        key = self.key_func(request)

        now = time.time()
        async with self._lock:
            self._sweep(now)
            q = self._buckets.get(key)
            if q is None:
                q = deque()
                self._buckets[key] = q

            cutoff = now - self.window
            while q and q[0] < cutoff:
                q.popleft()

            if len(q) >= self.max_calls:
                retry_after = max(1, int(q[0] + self.window - now))
                resp = error_response(
                    429,
                    "TOO_MANY_REQUESTS",
                    f"Too many requests, try again in {retry_after}s",
                )
                resp.headers["Retry-After"] = str(retry_after)
                return await resp(scope, receive, send)

            q.append(now)

        return await self.app(scope, receive, send)


def make_key_func() -> Callable[[Request], str]:
    def _key(req: Request) -> str:
        ip = req.client.host if req.client else "unknown"

        auth = req.headers.get("authorization", "")
        if auth.lower().startswith("bearer "):
            token = auth.split(" ", 1)[1].strip()
            try:
                return f"user:{verify_token(token, ACCESS).user_id}"
            except InvalidTokenError:
                pass

        return f"ip:{ip}"
    return _key
