"""
Tiny façade over :pymod:`logging` so internal modules can do

```python
from ytranscript.logger import log
log.debug("Hi")
```

and end-users can tweak verbosity via the environment:

```bash
export YTRANSCRIPT_LOGLEVEL=DEBUG
```
"""
from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["log", "configure_logging", "level_for"]

_ENV_VAR = "YTRANSCRIPT_LOGLEVEL"

log = logging.getLogger("ytranscript")


def level_for(verbose: int) -> int:
    """0 → WARNING, 1 → INFO, ≥2 → DEBUG unless the env var says otherwise."""
    env_level = os.getenv(_ENV_VAR)
    if env_level:
        return getattr(logging, env_level.upper(), logging.INFO)
    return [logging.WARNING, logging.INFO, logging.DEBUG][min(max(verbose, 0), 2)]


def configure_logging(verbose: int, console: Console | None = None) -> None:
    """Initialise root logging once, rendering records through rich."""
    root = logging.getLogger()
    if root.handlers:
        return
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_level=True,
        show_path=False,
        markup=False,
    )
    logging.basicConfig(level=level_for(verbose), handlers=[handler], format="%(message)s")
    # urllib3 chatter is only interesting when debugging
    logging.getLogger("urllib3").setLevel(
        logging.DEBUG if verbose > 1 else logging.WARNING
    )
