from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display over unique addresses while geocoding (tqdm, TTY only).

Geocoding is the only slow phase (one sequential network round-trip per
unique address), so it is the only one with a progress bar. In non-TTY
environments (CI, stderr redirected) the bar is disabled to avoid ANSI spam.
"""

__all__ = [
    "GeocodeProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Return True when stderr (where tqdm draws) is a TTY."""
    return sys.stderr.isatty()


class GeocodeProgress:
    """Progress tracker for the geocoding loop.

    Counts succeeded / failed addresses whether or not a bar is shown, and
    shows them as the bar postfix when it is.
    """

    def __init__(self, total_addresses: int, *, enabled: bool = True, description: str = "Geocoding") -> None:
        self.total_addresses = total_addresses
        self.description = description
        self.succeeded = 0
        self.failed = 0

        self.enabled = enabled and is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_addresses,
                desc=description,
                unit="addr",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_address(self, query: str) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.set_description_str(f"{self.description}: {query[:30]}")

    def finish_address(self, success: bool = True) -> None:
        if success:
            self.succeeded += 1
        else:
            self.failed += 1
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(ok=self.succeeded, failed=self.failed)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> GeocodeProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
