"""Template download and extraction.

Fetches the branch archive of a template repository over HTTPS and unpacks
it into the project directory, dropping the archive's top-level folder so the
template files land directly in the target. No git history and no cache are
kept.

Typical usage::

    fetcher = TemplateFetcher()
    await fetcher.fetch(locate_template("react", "ts"), Path("demo"), on_info=print)
"""

from __future__ import annotations

import asyncio
import gzip
import io
import os
import tarfile
from collections.abc import Callable
from pathlib import Path, PurePosixPath

import httpx

from .config import TemplateSettings
from .errors import FetchError
from .models import TemplateRef

SUPPORTED_HOSTS = ("github",)


def _format_size(num_bytes: int) -> str:
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"


def _strip_top_level(name: str) -> PurePosixPath | None:
    """Return *name* without its first path component, or ``None`` if nothing is left."""
    parts = PurePosixPath(name).parts
    if len(parts) <= 1:
        return None
    return PurePosixPath(*parts[1:])


def _check_member_path(name: str, relative: PurePosixPath) -> None:
    if PurePosixPath(name).is_absolute() or ".." in relative.parts:
        raise FetchError(f"Refusing to extract unsafe archive member: {name}")


def extract_archive(data: bytes, target: Path) -> int:
    """Extract a gzipped tarball into *target*, stripping the top-level folder.

    Args:
        data: Raw ``.tar.gz`` bytes.
        target: Existing directory to extract into.

    Returns:
        The number of regular files written.

    Raises:
        FetchError: If the archive is corrupt or contains a member that would
            land outside *target*.
    """
    root = target.resolve()
    written = 0

    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
            for member in archive.getmembers():
                relative = _strip_top_level(member.name)
                if relative is None:
                    continue
                _check_member_path(member.name, relative)
                destination = root.joinpath(*relative.parts)

                if member.isdir():
                    destination.mkdir(parents=True, exist_ok=True)
                elif member.isfile():
                    source = archive.extractfile(member)
                    if source is None:
                        raise FetchError(f"Cannot read archive member: {member.name}")
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    with source:
                        destination.write_bytes(source.read())
                    destination.chmod((member.mode & 0o755) | 0o644)
                    written += 1
                elif member.issym():
                    link_target = os.path.normpath(
                        os.path.join(destination.parent, member.linkname)
                    )
                    if os.path.commonpath([root, link_target]) != str(root):
                        raise FetchError(
                            f"Refusing to extract symlink outside project: {member.name}"
                        )
                    destination.parent.mkdir(parents=True, exist_ok=True)
                    os.symlink(member.linkname, destination)
                else:
                    raise FetchError(f"Unsupported archive member type: {member.name}")
    except (tarfile.TarError, EOFError, gzip.BadGzipFile) as exc:
        # EOFError: gzip stream cut short, e.g. a dropped connection.
        raise FetchError(f"Corrupt template archive: {exc}") from exc
    except OSError as exc:
        raise FetchError(f"Cannot write template files: {exc}") from exc

    return written


class TemplateFetcher:
    """Downloads template archives with ``httpx`` and extracts them locally."""

    def __init__(
        self,
        settings: TemplateSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or TemplateSettings()
        self.transport = transport

    def archive_url(self, template: TemplateRef) -> str:
        """Return the ``.tar.gz`` URL for *template*.

        Raises:
            FetchError: If the template is hosted somewhere other than GitHub.
        """
        if template.host not in SUPPORTED_HOSTS:
            raise FetchError(f"Unsupported template host: {template.host}")
        base = self.settings.archive_base_url.rstrip("/")
        return f"{base}/{template.org}/{template.repo}/tar.gz/{template.branch}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.timeout, connect=10.0),
            follow_redirects=True,
            transport=self.transport,
        )

    async def download(
        self,
        url: str,
        on_progress: Callable[[int], None] | None = None,
    ) -> bytes:
        """Download *url* and return the response body.

        The body is streamed; *on_progress* receives the running byte count
        after every chunk.

        Raises:
            FetchError: On connection errors, timeouts or non-2xx responses.
        """
        try:
            async with self._client() as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    chunks: list[bytes] = []
                    received = 0
                    async for chunk in response.aiter_bytes():
                        chunks.append(chunk)
                        received += len(chunk)
                        if on_progress is not None:
                            on_progress(received)
                    return b"".join(chunks)
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == 404:
                message = f"Template not found (HTTP 404): {url}"
            else:
                message = f"Template server returned HTTP {status}: {url}"
            raise FetchError(message, url=url) from exc
        except httpx.TimeoutException as exc:
            raise FetchError(
                f"Download timed out after {self.settings.timeout}s: {url}", url=url
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Cannot download {url}: {exc}", url=url) from exc

    async def fetch(
        self,
        template: TemplateRef,
        target: Path,
        on_info: Callable[[str], None] | None = None,
    ) -> None:
        """Materialize *template* into the existing directory *target*.

        Args:
            template: Template to download.
            target: Empty directory that receives the template files.
            on_info: Optional callback receiving progress messages.

        Raises:
            FetchError: If the download or the extraction fails.
        """
        notify = on_info or (lambda _message: None)
        url = self.archive_url(template)

        notify(f"Downloading {template} ...")
        data = await self.download(
            url,
            on_progress=lambda received: notify(
                f"Downloading {template} ... {_format_size(received)}"
            ),
        )

        notify(f"Extracting {_format_size(len(data))} into {target} ...")
        count = await asyncio.to_thread(extract_archive, data, target)
        if count == 0:
            raise FetchError(f"Template archive is empty: {url}", url=url)
        notify(f"Extracted {count} files")
