"""
Structural checks on the ContentType and Taxonomy definitions.
"""

from typing import Iterable, List

from ..collector import NoticeCollector
from ..content import CollectionField, Field, SetField
from ..context import CONTENT_TYPE_REQUIREMENTS, CheckContext
from ..models import Severity

GENERAL_FORBIDDEN_FIELD_NAMES = frozenset([
    'id', 'definitionfromcontenttypeconfig', 'twig', 'definiiton', 'icon',
    'author', 'status', 'createdat', 'modifiedat', 'publishedat',
    'depublishedat', 'fields', 'field', 'statuses', 'authorname',
    'taxonomies', 'array',
])

SET_FORBIDDEN_FIELD_NAMES = frozenset([
    'id', 'definition', 'name', 'apivalue', 'value', 'defaultvalue', 'new',
    'parsedvalue', 'twigvalue', 'sortorder', 'locale', 'version', 'parent',
    'label', 'type', 'contentselect',
])

SLUG_USES_INFO = (
    'Make sure to define the <code>uses:</code> attribute of the <code>slug</code>. '
    'It should refer to existing Fields.'
)


def new_content_type_check(ctx: CheckContext, notices: NoticeCollector):
    """A ContentType the routing requirements don't know about yet means a stale cache."""
    compiled = str(ctx.parameter(CONTENT_TYPE_REQUIREMENTS) or '').split('|')

    for content_type in ctx.config.content_types:
        if content_type.slug not in compiled:
            notices.record(
                Severity.DANGER,
                f"A <b>new ContentType</b> ('{content_type.name}') was added. Make sure to "
                "<a href='./clearcache'>clear the cache</a>, so it shows up correctly.",
                "By clearing the cache, you'll ensure the routing requirements are updated, allowing "
                "Bolt to generate the correct links to the new ContentType.",
            )
            return


def slug_uses_check(ctx: CheckContext, notices: NoticeCollector):
    """A slug's `uses` must be defined and refer to existing fields."""
    for content_type in ctx.config.content_types:
        names = content_type.field_names()
        slugs = [f for f in content_type.fields if f.type == 'slug']

        for slug in slugs:
            uses = slug.uses
            if uses is None:
                notices.record(
                    Severity.WARNING,
                    f"The <b>ContentType {content_type.name}</b> has a slug field '{slug.name}', which "
                    "does not define the <code>uses</code> attribute.",
                    SLUG_USES_INFO,
                )
                break

            missing = [name for name in uses if name not in names]
            if missing:
                notices.record(
                    Severity.WARNING,
                    f"The <b>ContentType {content_type.name}</b> has an incorrectly defined "
                    f"<code>slug</code>. It refers to <code>{missing[0]}</code>, but there is no such "
                    "Field defined.",
                    SLUG_USES_INFO,
                )
                break


def field_types_check(ctx: CheckContext, notices: NoticeCollector):
    """Every field type must resolve to an implementation."""
    for content_type in ctx.config.content_types:
        for f in content_type.fields:
            if ctx.field_types(f.type):
                continue

            notices.record(
                Severity.INFO,
                f"A field of type <code>{f.type}</code> was added to the '{content_type.name}' "
                "ContentType, but this is not a valid field type.",
                f"Edit your <code>contenttypes.yaml</code> to ensure that the "
                f"<code>{content_type.slug}/{f.type}</code> field has a valid type.",
            )


def forbidden_field_names_check(ctx: CheckContext, notices: NoticeCollector):
    """Some field names clash with properties the templates already expose."""
    for content_type in ctx.config.content_types:
        _check_field_names(content_type.fields, content_type.slug, notices, in_set=False)


def _check_field_names(fields: Iterable[Field], content_type: str, notices: NoticeCollector, in_set: bool):
    for f in fields:
        name = f.name.lower()

        if in_set and name in SET_FORBIDDEN_FIELD_NAMES:
            notices.record(
                Severity.WARNING,
                f"A Set field in <strong>{content_type}</strong> has a name <code>{f.name}</code>. You "
                "may not be able to access a field with that name in Twig, because it is a reserved "
                "Bolt word.",
                f"You should not use a <code>{f.name}</code> field inside a set. Please rename it.",
            )
        elif not in_set and name in GENERAL_FORBIDDEN_FIELD_NAMES:
            notices.record(
                Severity.WARNING,
                f"A field with name <code>{f.name}</code> was found inside the "
                f"<strong>{content_type}</strong> ContentType. You may not be able to access a field "
                "with that name in Twig.",
                '',
            )

        if isinstance(f, (SetField, CollectionField)):
            _check_field_names(f.children, content_type, notices, in_set=isinstance(f, SetField))


def inferred_slug_check(ctx: CheckContext, notices: NoticeCollector):
    """The ContentType's slug could be read two ways."""
    for content_type in ctx.config.content_types:
        if len(content_type.inferred_slug) < 2:
            continue

        first, second = content_type.inferred_slug[:2]
        notices.record(
            Severity.WARNING,
            f"There is an ambiguity in the <code>slug</code> of the <strong>{content_type.name}</strong> "
            f"ContentType: It can be either <code>{first}</code> or <code>{second}</code>.",
            "You should either make the ContentType's key and its <code>name</code>-field consistent, or "
            "explicitly define the <code>slug</code> as you'd like to reference this ContentType. For "
            f"now, Bolt will use <code>{content_type.slug}</code>",
        )


def localization_check(ctx: CheckContext, notices: NoticeCollector):
    """`locales` and `localize: true` only make sense together."""
    no_locales = {}
    no_localized_fields: List[str] = []

    for content_type in ctx.config.content_types:
        localized = [f.name for f in content_type.localized_fields]

        if not content_type.locales and localized:
            no_locales[content_type.name] = localized

        if content_type.locales and not localized:
            no_localized_fields.append(content_type.name)

    if no_localized_fields:
        notices.record(
            Severity.INFO,
            f"The <code>locales</code> option is set on ContentType(s) "
            f"<code>{', '.join(no_localized_fields)}</code>, but no fields are localized.",
            'Make sure to update your <code>contenttypes.yaml</code> by removing the <code>locales</code> '
            'option <b>or</b> by adding <code>localize: true</code> to fields that can be translated.',
        )

    for name, fields in no_locales.items():
        notices.record(
            Severity.WARNING,
            f"The <code>localize: true</code> option is set for field(s) <code>{', '.join(fields)}</code>, "
            f"but their ContentType <code>{name}</code> has no locales set.",
            f"Make sure to add the <code>locales</code> option with the enabled languages to the "
            f"<code>{name}</code> ContentType.",
        )


def duplicate_identifiers_check(ctx: CheckContext, notices: NoticeCollector):
    """ContentTypes and Taxonomies share the routing namespace."""
    content_ids = _unique(i for ct in ctx.config.content_types for i in ct.identifiers)
    taxonomy_ids = set(i for t in ctx.config.taxonomies for i in t.identifiers)

    overlap = [i for i in content_ids if i in taxonomy_ids]
    if not overlap:
        return

    notices.record(
        Severity.WARNING,
        'The ContentTypes and Taxonomies contain <strong>overlapping identifiers</strong>: '
        f"<code>{'</code>, <code>'.join(overlap)}</code>.",
        'Edit your <code>contenttypes.yaml</code> or your <code>taxonomies.yaml</code>, to ensure that all '
        'the used <code>slug</code>s and <code>singular_slug</code>s are unique.',
    )


def _unique(values: Iterable[str]) -> List[str]:
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen
