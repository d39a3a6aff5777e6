"""Quick-response links embedded in reminder emails."""

from __future__ import annotations

import random
import string
import time
from typing import Callable, Optional

TOKEN_ALPHABET = string.digits + string.ascii_lowercase
TOKEN_SUFFIX_LENGTH = 9


class QuickResponseLinkGenerator:
    """Build ``<base_url>?response=resp_<millis>_<suffix>`` links.

    Tokens are display-only nonces: nothing stores or checks them.
    """

    def __init__(
        self,
        base_url: str,
        *,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._clock = clock
        self._rng = rng or random.Random()

    def new_token(self) -> str:
        millis = int(self._clock() * 1000)
        suffix = "".join(self._rng.choices(TOKEN_ALPHABET, k=TOKEN_SUFFIX_LENGTH))
        return f"resp_{millis}_{suffix}"

    def generate(self) -> str:
        return f"{self.base_url}?response={self.new_token()}"


__all__ = ["QuickResponseLinkGenerator", "TOKEN_ALPHABET", "TOKEN_SUFFIX_LENGTH"]
