"""
Everything a check is allowed to look at.

The host builds one CheckContext per run and hands it to the engine.
Checks only read from it; the probes are the only way they touch the
outside world.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable, List, Mapping, Optional, Union
from urllib.parse import urlsplit

from .content import ContentType, Taxonomy, parse_content_types, parse_taxonomies
from .probes import (
    Parameters,
    ReachabilityProbe,
    WritabilityProbe,
    capability_available,
    is_ip_address,
)
from .settings import DEFAULT_MANIFEST_PATH, ExtensionSettings

# Host parameter names
ENVIRONMENT = 'app.environment'
DEBUG = 'app.debug'
CONTENT_TYPE_REQUIREMENTS = 'routing.contenttypes'
DATABASE_DRIVER = 'database.driver'
BACKEND_URL = 'app.backend_url'
CANONICAL_SCHEME = 'canonical.scheme'
CANONICAL_HOST = 'canonical.host'

DEFAULT_PORTS = {'http': 80, 'https': 443}

FieldTypeLookup = Callable[[str], Any]
ServiceLookup = Callable[[str], bool]
CapabilityLookup = Callable[[str], bool]


@dataclass(frozen=True)
class RequestInfo:
    """The request the notices are being generated for."""
    scheme: str = 'http'
    host: str = 'localhost'
    port: Optional[int] = None
    base_path: str = ''
    uri: str = ''

    @property
    def http_host(self) -> str:
        """Host, with the port appended when it isn't the default one."""
        if self.port is None or DEFAULT_PORTS.get(self.scheme) == self.port:
            return self.host
        return f"{self.host}:{self.port}"

    @property
    def scheme_and_host(self) -> str:
        return f"{self.scheme}://{self.http_host}"

    @property
    def base_url(self) -> str:
        """Absolute URL of the site's homepage, with a trailing slash."""
        return f"{self.scheme_and_host}{self.base_path.rstrip('/')}/"

    @classmethod
    def from_url(cls, url: str, base_path: str = '') -> 'RequestInfo':
        """Build from a full request URL."""
        parts = urlsplit(url)
        return cls(
            scheme=parts.scheme or 'http',
            host=parts.hostname or '',
            port=parts.port,
            base_path=base_path,
            uri=url,
        )


class HostConfig:
    """
    Read access to the host's configuration tree.

    Values are addressed with slash-separated paths, for example
    `general/thumbnails/save_files`.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data = data or {}

    def get(self, path: str, default: Any = None) -> Any:
        node: Any = self._data
        for part in path.split('/'):
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]
        return node

    @property
    def content_types(self) -> List[ContentType]:
        return parse_content_types(self.get('contenttypes'))

    @property
    def taxonomies(self) -> List[Taxonomy]:
        return parse_taxonomies(self.get('taxonomies'))


def _no_services(name: str) -> bool:
    return False


@dataclass
class CheckContext:
    """
    Collaborators for one run of the notices engine.

    Attributes:
        config: The host's configuration tree
        request: The current request
        settings: Extension settings (local domains, check toggles)
        parameters: Named host parameters (environment, debug, ...)
        field_types: Returns the implementation for a field type, or None
        services: Returns whether a named service is registered
        capabilities: Returns whether a native capability is available
        paths: Named filesystem locations (root, files, config, ...)
        project_dir: Root of the host project
        manifest_path: Required-services manifest
        reachability: HTTP probe; created (and released after each run) when omitted
    """
    config: HostConfig
    request: RequestInfo
    field_types: FieldTypeLookup
    settings: ExtensionSettings = field(default_factory=ExtensionSettings)
    parameters: Parameters = field(default_factory=Parameters)
    services: ServiceLookup = _no_services
    capabilities: CapabilityLookup = capability_available
    paths: Mapping[str, Union[str, Path]] = field(default_factory=dict)
    project_dir: Optional[Union[str, Path]] = None
    manifest_path: Union[str, Path] = DEFAULT_MANIFEST_PATH
    writability: WritabilityProbe = field(default_factory=WritabilityProbe)
    reachability: Optional[ReachabilityProbe] = None
    owns_reachability: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        if self.reachability is None:
            self.reachability = ReachabilityProbe(timeout=self.settings.request_timeout)
            self.owns_reachability = True

    def release(self):
        """Close the HTTP session of a probe this context created itself.

        A probe handed in by the caller stays open; the caller owns it.
        """
        if self.owns_reachability:
            self.reachability.close()

    def parameter(self, name: str, default: Any = None) -> Any:
        return self.parameters.get(name, default)

    def get_path(self, name: str) -> Optional[Path]:
        value = self.paths.get(name)
        return Path(value) if value else None

    def is_ready(self) -> bool:
        """The host is far enough along when a basic field type resolves."""
        return bool(self.field_types('text'))

    def on_local_url(self) -> bool:
        """
        Whether the current host looks like a development environment.

        An IP address always counts as local. Otherwise the host is matched
        against the configured and default domain partials.
        """
        host = self.request.host
        if not host:
            return False

        if is_ip_address(host):
            return True

        return any(partial in host for partial in self.settings.domain_partials)


def field_type_registry(types: Iterable[str]) -> FieldTypeLookup:
    """Field type lookup backed by a fixed set of known types."""
    known = set(types)
    return lambda name: name if name in known else None


def service_registry(names: Iterable[str]) -> ServiceLookup:
    """Service lookup backed by a fixed set of registered names."""
    known = set(names)
    return lambda name: name in known
