"""
Resolution of ``import`` targets to source text.

An address is first looked up as a local file carrying the configured source
extension, then fetched with a plain HTTP GET. Only when both stages fail is
the resource reported as not found.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path

import httpx
from pydantic import BaseModel, ConfigDict

from apl.core.config import InterpreterConfig
from apl.core.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)


class ResourceOrigin(StrEnum):
    """Where a resource's text was found."""

    LOCAL = "local"
    REMOTE = "remote"


class Resource(BaseModel):
    """Source text resolved from an import address."""

    address: str
    text: str
    origin: ResourceOrigin

    model_config = ConfigDict(frozen=True)

    @property
    def directory(self) -> Path | None:
        """Directory that relative imports inside this resource resolve against."""
        if self.origin == ResourceOrigin.LOCAL:
            return Path(self.address).parent
        return None


class ResourceResolver:
    """Two-stage resolver: local file system, then network."""

    def __init__(
        self,
        config: InterpreterConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config or InterpreterConfig()
        self._client = client

    def resolve(self, address: str, relative_to: Path | None = None) -> Resource:
        """
        Resolve an address to source text.

        Args:
            address: File path or http(s) URL
            relative_to: Directory of the importing source, if it was a local file

        Returns:
            The resolved resource.

        Raises:
            ResourceNotFoundError: If neither the local nor the remote lookup succeeds.
        """
        local_reason = ""
        try:
            return self.resolve_local(address, relative_to)
        except FileNotFoundError as e:
            local_reason = str(e)

        logger.info("Local lookup of %s failed (%s), trying network", address, local_reason)

        try:
            return self.resolve_remote(address)
        except LookupError as e:
            remote_reason = str(e)

        raise ResourceNotFoundError(
            f"Resource {address!r} not found: {local_reason}; {remote_reason}",
            address,
        )

    def resolve_local(self, address: str, relative_to: Path | None = None) -> Resource:
        """Read a local source file. Raises FileNotFoundError with the reason, including unreadable files."""
        extension = self.config.source_extension
        wrong_extension: Path | None = None

        for candidate in self._local_candidates(address, relative_to):
            if not candidate.is_file():
                continue
            if candidate.suffix.lower() != extension:
                wrong_extension = candidate
                continue
            try:
                text = candidate.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise FileNotFoundError(f"file {candidate} can't be read ({e})") from e
            logger.debug("Resolved %s to local file %s", address, candidate)
            return Resource(
                address=str(candidate.resolve()), text=text, origin=ResourceOrigin.LOCAL
            )

        if wrong_extension is not None:
            raise FileNotFoundError(
                f"only files with the {extension} extension can be imported ({wrong_extension})"
            )
        raise FileNotFoundError(f"file {address} doesn't exist")

    def resolve_remote(self, address: str) -> Resource:
        """Fetch a source over HTTP. Raises LookupError with the reason."""
        try:
            url = httpx.URL(address)
        except httpx.InvalidURL as e:
            raise LookupError(f"invalid address ({e})") from e
        if url.scheme not in ("http", "https"):
            raise LookupError("not an http(s) address")

        try:
            if self._client is not None:
                response = self._client.get(url, timeout=self.config.import_timeout)
            else:
                with httpx.Client(timeout=self.config.import_timeout) as client:
                    response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise LookupError(f"server answered {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise LookupError(f"request failed ({e})") from e

        logger.debug("Fetched %s (%d characters)", address, len(response.text))
        return Resource(address=str(response.url), text=response.text, origin=ResourceOrigin.REMOTE)

    def _local_candidates(self, address: str, relative_to: Path | None) -> list[Path]:
        path = Path(address).expanduser()
        if path.is_absolute():
            return [path]
        bases: list[Path] = []
        if relative_to is not None:
            bases.append(relative_to)
        bases.extend(self.config.import_search_paths)
        return [base / path for base in bases]
