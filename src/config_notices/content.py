"""
ContentType and Taxonomy definitions.

The host hands us its content-type configuration as plain nested
mappings. These helpers turn that into a small typed tree so the checks
don't need to poke around in dicts. Fields are a tagged variant: plain
scalar fields, and the two container types `set` and `collection` which
carry their own ordered nested fields.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .errors import ConfigurationError

SET = 'set'
COLLECTION = 'collection'
CONTAINER_TYPES = (SET, COLLECTION)


@dataclass(frozen=True)
class ScalarField:
    """Any non-container field (text, slug, image, ...)."""
    name: str
    type: str
    options: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def localize(self) -> bool:
        return self.options.get('localize') is True

    @property
    def uses(self) -> Optional[List[str]]:
        """Fields a slug is generated from, None when not defined."""
        if 'uses' not in self.options or self.options['uses'] is None:
            return None
        uses = self.options['uses']
        if isinstance(uses, str):
            return [uses]
        return list(uses)


@dataclass(frozen=True)
class SetField:
    """A `set` field: a fixed group of nested fields."""
    name: str
    children: Tuple['Field', ...] = ()
    options: Dict[str, Any] = field(default_factory=dict, compare=False)
    type: str = SET

    @property
    def localize(self) -> bool:
        return self.options.get('localize') is True


@dataclass(frozen=True)
class CollectionField:
    """A `collection` field: a repeatable list of nested fields."""
    name: str
    children: Tuple['Field', ...] = ()
    options: Dict[str, Any] = field(default_factory=dict, compare=False)
    type: str = COLLECTION

    @property
    def localize(self) -> bool:
        return self.options.get('localize') is True


Field = Union[ScalarField, SetField, CollectionField]


@dataclass(frozen=True)
class ContentType:
    """A single ContentType definition."""
    key: str
    name: str
    slug: str
    singular_slug: Optional[str] = None
    fields: Tuple[Field, ...] = ()
    locales: Tuple[str, ...] = ()
    inferred_slug: Tuple[str, ...] = ()

    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    @property
    def localized_fields(self) -> List[Field]:
        return [f for f in self.fields if f.localize]

    @property
    def identifiers(self) -> List[str]:
        """Slug and singular slug, as used for routing."""
        return [s for s in (self.slug, self.singular_slug) if s]


@dataclass(frozen=True)
class Taxonomy:
    """A single Taxonomy definition."""
    key: str
    slug: str
    singular_slug: Optional[str] = None

    @property
    def identifiers(self) -> List[str]:
        return [s for s in (self.slug, self.singular_slug) if s]


# === Parsing ===

def parse_field(name: str, data: Any, path: str = '') -> Field:
    """Build a Field from its config mapping, descending into containers."""
    location = f"{path}/{name}" if path else str(name)

    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Field '{location}' is not a mapping", location)
    if 'type' not in data:
        raise ConfigurationError(f"Field '{location}' has no type", location)

    field_type = data['type']
    options = {k: v for k, v in data.items() if k != 'fields'}

    if field_type in CONTAINER_TYPES:
        if data.get('fields') is None:
            raise ConfigurationError(f"Field '{location}' is a {field_type} without fields", location)
        children = parse_fields(data['fields'], location)
        cls = SetField if field_type == SET else CollectionField
        return cls(name=str(name), children=children, options=options)

    return ScalarField(name=str(name), type=str(field_type), options=options)


def parse_fields(data: Any, path: str = '') -> Tuple[Field, ...]:
    """Build the ordered fields of a ContentType or container field."""
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Fields of '{path}' are not a mapping", path)
    return tuple(parse_field(name, value, path) for name, value in data.items())


def parse_content_type(key: str, data: Mapping) -> ContentType:
    """Build a ContentType from its config mapping."""
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"ContentType '{key}' is not a mapping", key)

    slug = data.get('slug') or key
    inferred = data.get('inferred_slug') or ()

    return ContentType(
        key=str(key),
        name=str(data.get('name') or key),
        slug=str(slug),
        singular_slug=data.get('singular_slug'),
        fields=parse_fields(data.get('fields'), str(key)),
        locales=tuple(data.get('locales') or ()),
        inferred_slug=tuple(inferred),
    )


def parse_content_types(data: Optional[Mapping]) -> List[ContentType]:
    """Parse the `contenttypes` config section, keeping its order."""
    if not data:
        return []
    if not isinstance(data, Mapping):
        raise ConfigurationError("contenttypes is not a mapping", 'contenttypes')
    return [parse_content_type(key, value) for key, value in data.items()]


def parse_taxonomies(data: Optional[Mapping]) -> List[Taxonomy]:
    """Parse the `taxonomies` config section, keeping its order."""
    if not data:
        return []
    if not isinstance(data, Mapping):
        raise ConfigurationError("taxonomies is not a mapping", 'taxonomies')

    taxonomies = []
    for key, value in data.items():
        value = value or {}
        taxonomies.append(Taxonomy(
            key=str(key),
            slug=str(value.get('slug') or key),
            singular_slug=value.get('singular_slug'),
        ))
    return taxonomies
