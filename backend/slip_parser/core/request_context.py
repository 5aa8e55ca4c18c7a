"""Per-request correlation id and timing checkpoints."""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def generate_request_id() -> str:
    """``req_<epoch ms>_<5 base36 chars>``; practically unique, not guaranteed."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
    return f"req_{int(time.time() * 1000)}_{suffix}"


@dataclass
class RequestContext:
    request_id: str = field(default_factory=generate_request_id)
    started_at: float = field(default_factory=time.monotonic)

    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self.started_at) * 1000)
