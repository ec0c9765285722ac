"""
Probe primitives used by the checks.

Each probe is a single fallible operation that answers with a plain
bool (or a value / None). Faults are converted to a negative answer
here, at the probe boundary, and never reach the calling check.

Usage:
    from config_notices.probes import WritabilityProbe, ReachabilityProbe

    writable = WritabilityProbe().is_writable('/var/www/files', 'probe.txt')
    reachable = ReachabilityProbe(timeout=5).is_reachable('https://example.org/')
"""

import importlib.util
import ipaddress
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Union

import requests

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_TIMEOUT = 5.0


class WritabilityProbe:
    """Checks whether files can be written to a directory."""

    def is_writable(self, directory: Optional[PathLike], filename: str, keep: bool = False) -> bool:
        """
        Try to write a small file into a directory.

        Args:
            directory: Target directory (must already exist)
            filename: Name of the probe file
            keep: Leave the file in place (see remove())

        Returns:
            True if the file could be written (and removed, unless kept)
        """
        if not directory:
            return False

        file_path = Path(directory) / filename.lstrip('/')
        try:
            file_path.write_text('ok')
            if not keep:
                file_path.unlink()
        except OSError as e:
            logger.debug(f"Writability probe failed for {file_path}: {e}")
            self._cleanup(file_path)
            return False

        return True

    def remove(self, directory: Optional[PathLike], filename: str) -> bool:
        """Remove a probe file. Returns True if nothing is left behind."""
        if not directory:
            return True
        return self._cleanup(Path(directory) / filename.lstrip('/'))

    def _cleanup(self, file_path: Path) -> bool:
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            logger.debug(f"Could not remove probe file {file_path}: {e}")
            return False
        return True

    @contextmanager
    def probe_artifact(self, directory: Optional[PathLike], filename: str) -> Iterator[bool]:
        """
        Create a probe file for the duration of a block.

        Yields whether the file was created. The file is removed on every
        way out of the block, exceptions included.
        """
        created = self.is_writable(directory, filename, keep=True)
        try:
            yield created
        finally:
            self.remove(directory, filename)


class ReachabilityProbe:
    """Checks whether a URL answers with a 200 OK."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        self.timeout = timeout
        self._session: Optional[requests.Session] = None

    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session (reused across probes)."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def is_reachable(self, url: str) -> bool:
        """GET an absolute URL. Any transport fault counts as unreachable."""
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.debug(f"Reachability probe failed for {url}: {e}")
            return False

        return response.status_code == requests.codes.ok

    def close(self):
        if self._session is not None:
            self._session.close()
            self._session = None


class Parameters:
    """Read-only lookup of named host parameters."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = dict(values or {})

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._values

    def __contains__(self, name: str) -> bool:
        return self.has(name)


# Capability name -> module that provides it
CAPABILITY_MODULES = {
    'exif': 'PIL.ExifTags',
    'fileinfo': 'magic',
    'gd': 'PIL.Image',
}


def module_available(module: str) -> bool:
    """True if a module can be imported, without importing it."""
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        # A missing parent package raises instead of returning None
        return False


def capability_available(name: str) -> bool:
    """Default capability lookup, backed by CAPABILITY_MODULES."""
    return module_available(CAPABILITY_MODULES.get(name, name))


def is_ip_address(value: Optional[str]) -> bool:
    """True if value is a literal IPv4 or IPv6 address."""
    if not value:
        return False
    try:
        ipaddress.ip_address(value.strip('[]'))
    except ValueError:
        return False
    return True
