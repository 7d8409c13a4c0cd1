"""
Runtime settings for one pipeline run.

Nothing in the pipeline reads ambient state; callers build a
:class:`TranscriptConfig` (directly, from the environment, or via the CLI)
and pass it in, so concurrent runs can use different preferences.

```bash
export YTRANSCRIPT_LANG=de
export YTRANSCRIPT_REGION=AT
export YTRANSCRIPT_STRIDE=10
```
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Final, Mapping, Optional

__all__ = [
    "DEFAULT_LANGUAGE",
    "DEFAULT_REGION",
    "DEFAULT_STRIDE",
    "DEFAULT_TIMEOUT",
    "ENV_PREFIX",
    "TranscriptConfig",
]

DEFAULT_LANGUAGE: Final[str] = "en"
DEFAULT_REGION: Final[str] = "EN"
DEFAULT_STRIDE: Final[int] = 5
DEFAULT_TIMEOUT: Final[float] = 30.0

ENV_PREFIX: Final[str] = "YTRANSCRIPT_"


@dataclass(frozen=True)
class TranscriptConfig:
    language: str = DEFAULT_LANGUAGE
    region: str = DEFAULT_REGION
    stride: int = DEFAULT_STRIDE
    timeout: float = DEFAULT_TIMEOUT
    proxy: Optional[str] = None

    def __post_init__(self) -> None:
        if self.stride < 1:
            raise ValueError(f"stride must be >= 1, got {self.stride}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "TranscriptConfig":
        """Defaults overlaid with any ``YTRANSCRIPT_*`` variables that are set."""
        env = os.environ if environ is None else environ
        get = lambda key: env.get(ENV_PREFIX + key) or None  # noqa: E731
        stride = get("STRIDE")
        timeout = get("TIMEOUT")
        return cls().with_overrides(
            language=get("LANG"),
            region=get("REGION"),
            stride=int(stride) if stride else None,
            timeout=float(timeout) if timeout else None,
            proxy=get("PROXY"),
        )

    def with_overrides(self, **changes) -> "TranscriptConfig":
        """Copy with every non-``None`` keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
