"""Puzzle input download from adventofcode.com.

Inputs are personal to each account, so requests carry the ``session``
cookie from the configuration. Downloaded inputs never change; a file that
already exists locally is not fetched again.

Typical usage::

    fetcher = InputFetcher.from_config(config)
    path = fetcher.get_input(2023, 5)
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

import httpx

from aoctool.config import Config
from aoctool.errors import AocToolError
from aoctool.utils import print_step


class InputFetchError(AocToolError):
    """Raised when the puzzle input cannot be downloaded."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class MissingSessionError(InputFetchError):
    """Raised when no session token is configured."""

    def __init__(self) -> None:
        super().__init__(
            "no session token configured; set AOC_SESSION or run `aoctool config --session`"
        )


class InputSource(Protocol):
    """Downloads and stores the input for a puzzle day."""

    def get_input(self, year: int, day: int) -> Path: ...


class InputFetcher:
    """Blocking httpx client for ``/<year>/day/<day>/input``."""

    def __init__(
        self,
        session: str,
        input_dir: str | Path,
        base_url: str = "https://adventofcode.com",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.session = session
        self.input_dir = Path(input_dir)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_config(cls, config: Config, year: int) -> "InputFetcher":
        return cls(
            session=config.session,
            input_dir=config.input_files(year),
            base_url=config.website_url,
        )

    def input_path(self, year: int, day: int) -> Path:
        return self.input_dir / f"input-{year}-{day:02}.txt"

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            cookies={"session": self.session},
            timeout=httpx.Timeout(self.timeout),
            transport=self.transport,
        )

    def get_input(self, year: int, day: int) -> Path:
        """Download the input for *year* / *day* unless it is already present.

        Returns:
            Path of the local input file.

        Raises:
            MissingSessionError: If no session token is configured.
            InputFetchError: On connection failures or non-2xx responses.
        """
        target = self.input_path(year, day)
        if target.exists():
            print_step(f"Input already present at {target}")
            return target

        if not self.session:
            raise MissingSessionError()

        url = f"/{year}/day/{day}/input"
        try:
            with self._client() as client:
                response = client.get(url)
                response.raise_for_status()
                body = response.content
        except httpx.HTTPStatusError as exc:
            raise InputFetchError(
                f"adventofcode.com returned HTTP {exc.response.status_code} for {year} day {day}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise InputFetchError(f"downloading input for {year} day {day}: {exc}") from exc

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(body)
        print_step(f"Saved input to {target}")
        return target
