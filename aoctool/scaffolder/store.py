"""Local cache of day template files.

Each year keeps a directory of template files. Anything missing is copied
once from the template source and kept indefinitely; the cache is never
refreshed. The source is the set of templates shipped inside this package,
or raw files over HTTPS when a template base URL is configured.

Typical usage::

    source = template_source_for(config)
    template_dir = ensure_template_dir(config.day_template(2023), TEMPLATE_NAMES, source)
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

import httpx

from aoctool.config import Config
from aoctool.errors import AocToolError
from aoctool.utils import print_step

PACKAGED_TEMPLATE_DIR = Path(__file__).parent / "day_template"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TemplateFetchError(AocToolError):
    """Base class for template download failures."""

    def __init__(self, message: str, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class ClientBuildError(TemplateFetchError):
    """Raised when the HTTP client for template downloads cannot be built."""


class TemplateRequestError(TemplateFetchError):
    """Raised when the template request could not be sent or answered."""


class ResponseStatusError(TemplateFetchError):
    """Raised when the template server answers with a non-success status."""

    def __init__(self, url: str, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(
            f"response status {status_code} requesting day template {url}", url=url
        )


class DownloadError(TemplateFetchError):
    """Raised when the response body cannot be read."""


class TemplateNotFoundError(TemplateFetchError):
    """Raised when a packaged template does not exist."""


# ---------------------------------------------------------------------------
# Sources
# ---------------------------------------------------------------------------


class TemplateSource(Protocol):
    """Anything that can produce the raw bytes of a named template."""

    def retrieve(self, name: str) -> bytes: ...


class HttpTemplateSource:
    """Fetch templates from ``<base_url>/<name>`` with a blocking httpx client.

    One request per template, gzip negotiated, no retries. Each failure stage
    maps to its own exception type.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        """Return a fresh ``Client`` configured with our timeout."""
        return httpx.Client(
            headers={"Accept-Encoding": "gzip"},
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            transport=self.transport,
        )

    def url_for(self, name: str) -> str:
        return f"{self.base_url}/{name}"

    def retrieve(self, name: str) -> bytes:
        """Download template *name* and return its body.

        Raises:
            ClientBuildError: The client could not be constructed.
            TemplateRequestError: Connecting, sending or a timeout failed.
            ResponseStatusError: The server answered with a non-2xx status.
            DownloadError: The body could not be read.
        """
        url = self.url_for(name)
        try:
            client = self._client()
        except Exception as exc:  # noqa: BLE001
            raise ClientBuildError(
                f"building request client for day template download: {exc}", url=url
            ) from exc

        with client:
            try:
                response = client.send(client.build_request("GET", url), stream=True)
            except httpx.RequestError as exc:
                raise TemplateRequestError(
                    f"requesting day template {url}: {exc}", url=url
                ) from exc

            try:
                if not response.is_success:
                    raise ResponseStatusError(url, response.status_code)
                try:
                    return response.read()
                except httpx.HTTPError as exc:
                    raise DownloadError(
                        f"downloading day template {url}: {exc}", url=url
                    ) from exc
            finally:
                response.close()


class PackagedTemplateSource:
    """Read templates from a local directory, by default the ones shipped with aoctool."""

    def __init__(self, directory: str | Path = PACKAGED_TEMPLATE_DIR) -> None:
        self.directory = Path(directory)

    def retrieve(self, name: str) -> bytes:
        path = self.directory / name
        if not path.is_file():
            raise TemplateNotFoundError(
                f"no packaged day template {name} in {self.directory}", url=str(path)
            )
        return path.read_bytes()


def template_source_for(config: Config) -> TemplateSource:
    """Return the template source *config* asks for.

    An empty ``template_base_url`` means the packaged templates.
    """
    if config.template_base_url:
        return HttpTemplateSource(config.template_base_url, timeout=config.template_timeout)
    return PackagedTemplateSource()


# ---------------------------------------------------------------------------
# Cache management
# ---------------------------------------------------------------------------


def missing_templates(template_dir: Path, names: Iterable[str]) -> list[str]:
    """Return the names from *names* that are not yet cached in *template_dir*."""
    return [name for name in names if not (template_dir / name).exists()]


def ensure_template_dir(
    template_dir: str | Path,
    names: Iterable[str],
    source: TemplateSource,
) -> Path:
    """Make sure every template in *names* is present in *template_dir*.

    The directory is created if needed. Missing files are fetched from
    *source* one at a time; the first failure aborts.

    Returns:
        The template directory.

    Raises:
        FileExistsError: If a file appeared between the check and the write.
    """
    template_dir = Path(template_dir)
    template_dir.mkdir(parents=True, exist_ok=True)

    for name in missing_templates(template_dir, names):
        print_step(f"Fetching day template [bold]{name}[/bold]")
        content = source.retrieve(name)
        target = template_dir / name
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("xb") as fh:
            fh.write(content)

    return template_dir
