"""
Extension settings and the required-services manifest.

Both live in YAML files next to the host's own configuration:

    # config/extensions/configuration-notices.yaml
    local_domains: [ '.foo', 'staging.' ]
    checks:
      theme_folder_access: true
    request_timeout: 5
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from .errors import ManifestError

logger = logging.getLogger(__name__)

# Host name partials that mark a development environment
DEFAULT_DOMAIN_PARTIALS = [
    '.dev', 'dev.', 'devel.', 'development.', 'test.', '.test',
    'new.', '.new', '.local', 'local.', '.wip', 'localhost',
]

DEFAULT_SETTINGS_PATH = Path('config') / 'extensions' / 'configuration-notices.yaml'
DEFAULT_MANIFEST_PATH = Path(__file__).parent / 'services.yaml'

# Sub-checks that are opt-in rather than opt-out
OPT_IN_CHECKS = {'theme_folder_access'}


@dataclass
class ExtensionSettings:
    """Settings for the notices extension"""
    local_domains: List[str] = field(default_factory=list)
    checks: Dict[str, bool] = field(default_factory=dict)
    request_timeout: float = 5.0

    @property
    def domain_partials(self) -> List[str]:
        """User partials followed by the defaults, without duplicates."""
        partials = []
        for partial in list(self.local_domains) + DEFAULT_DOMAIN_PARTIALS:
            partial = str(partial)
            if partial not in partials:
                partials.append(partial)
        return partials

    def is_enabled(self, check: str) -> bool:
        """Whether a check (or sub-check) is switched on."""
        return bool(self.checks.get(check, check not in OPT_IN_CHECKS))

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'ExtensionSettings':
        """
        Build settings from a parsed mapping.

        A single domain partial may be given as a plain string.

        Raises:
            ValueError: if local_domains or checks have the wrong shape
        """
        data = data or {}

        domains = data.get('local_domains') or []
        if isinstance(domains, str):
            domains = [domains]
        if not isinstance(domains, (list, tuple)):
            raise ValueError("local_domains must be a list of domain partials")

        checks = data.get('checks') or {}
        if not isinstance(checks, dict):
            raise ValueError("checks must be a mapping of check name to on/off")

        return cls(
            local_domains=[str(d) for d in domains if d],
            checks={str(k): bool(v) for k, v in checks.items()},
            request_timeout=float(data.get('request_timeout', 5.0)),
        )

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> 'ExtensionSettings':
        """Load settings from file, falling back to defaults"""
        config_path = Path(path) if path else DEFAULT_SETTINGS_PATH

        if not config_path.exists():
            logger.info(f"No notices settings found at {config_path}, using defaults")
            return cls()

        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f)
            if data is not None and not isinstance(data, dict):
                raise ValueError("settings file is not a mapping")
            settings = cls.from_dict(data)
            logger.info(f"Loaded notices settings from {config_path}")
            return settings
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.error(f"Failed to load notices settings: {e}")
            return cls()


@dataclass(frozen=True)
class RequiredService:
    """An entry in the required-services manifest."""
    key: str
    name: str
    code: str = ''


def load_services_manifest(path: Optional[Union[str, Path]] = None) -> List[RequiredService]:
    """
    Load the manifest of services the host must register.

    Raises:
        ManifestError: if the file is missing or malformed
    """
    manifest_path = Path(path) if path else DEFAULT_MANIFEST_PATH

    try:
        with open(manifest_path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ManifestError(f"Can't read services manifest {manifest_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ManifestError(f"Can't parse services manifest {manifest_path}: {e}") from e

    if not data:
        return []
    if not isinstance(data, dict):
        raise ManifestError(f"Services manifest {manifest_path} is not a mapping")

    services = []
    for key, entry in data.items():
        if not isinstance(entry, dict) or 'name' not in entry:
            raise ManifestError(f"Services manifest entry '{key}' has no name")
        services.append(RequiredService(key=str(key), name=str(entry['name']), code=str(entry.get('code', ''))))
    return services
