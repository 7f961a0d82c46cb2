"""
Tests for the dynamic data catalog
"""

import pytest

from dyntags.tags.catalog import (
    ALL_CONTEXTS,
    ArgType,
    CatalogRegistry,
    DataGroup,
    Field,
    Modifier,
    ModifierArg,
    ReturnType,
    coerce_return_type,
)
from dyntags.tags.exceptions import CatalogError


class TestGroupLookup:
    """Tests for groups_for / fields_for"""

    def test_groups_for_post_context(self, catalog):
        """Post context sees post, author, user and site, in registration order"""
        keys = [g.key for g in catalog.groups_for('post')]
        assert keys == ['post', 'author', 'user', 'site']

    def test_groups_for_site_context(self, catalog):
        """Site context only sees the site group"""
        assert [g.key for g in catalog.groups_for('site')] == ['site']

    def test_groups_for_term_context(self, catalog):
        """Term context sees the term group"""
        assert 'term' in [g.key for g in catalog.groups_for('term')]

    def test_unknown_context_is_empty(self, catalog):
        """Unknown context returns an empty list, never raises"""
        assert catalog.groups_for('nope') == []

    def test_fields_for_keeps_order(self, catalog):
        """Fields come back in declaration order"""
        keys = [f.key for f in catalog.fields_for('post')]
        assert keys[:3] == ['id', 'title', 'content']

    def test_fields_for_unknown_group(self, catalog):
        """Unknown group returns an empty list"""
        assert catalog.fields_for('nope') == []

    def test_get_field_resolves_alias(self, catalog):
        """':url' resolves to the permalink field"""
        field = catalog.get_field('post', ':url')
        assert field is not None
        assert field.key == 'permalink'

    def test_get_field_nested_key(self, catalog):
        """Nested keys are flattened with dots"""
        field = catalog.get_field('post', 'location.latitude')
        assert field.return_type == ReturnType.NUMBER

    def test_is_applicable(self, catalog):
        """Applicability follows the group's contexts"""
        assert catalog.is_applicable('post', 'post')
        assert not catalog.is_applicable('post', 'site')
        assert not catalog.is_applicable('nope', 'post')

    def test_contexts(self, catalog):
        """Every context used by a group is listed once"""
        assert sorted(catalog.contexts()) == sorted(ALL_CONTEXTS)


class TestModifierLookup:
    """Tests for modifiers_for"""

    def test_modifiers_for_text(self, catalog):
        """Text modifiers include truncate but not number formatting"""
        keys = [m.key for m in catalog.modifiers_for(ReturnType.TEXT)]
        assert 'truncate' in keys
        assert 'capitalize' in keys
        assert 'number_format' not in keys

    def test_modifiers_for_number(self, catalog):
        """Number modifiers include currency_format but not truncate"""
        keys = [m.key for m in catalog.modifiers_for(ReturnType.NUMBER)]
        assert 'currency_format' in keys
        assert 'truncate' not in keys

    def test_modifiers_for_accepts_string_type(self, catalog):
        """Type can be given by name"""
        assert catalog.modifiers_for('date') == catalog.modifiers_for(ReturnType.DATE)

    def test_modifiers_for_unknown_type(self, catalog):
        """Unknown or missing type returns an empty list"""
        assert catalog.modifiers_for('color') == []
        assert catalog.modifiers_for(None) == []

    def test_every_result_accepts_the_type(self, catalog):
        """modifiers_for only returns modifiers accepting the type"""
        for return_type in ReturnType:
            for modifier in catalog.modifiers_for(return_type):
                assert return_type in modifier.accepted_types

    def test_truncate_default_length(self, catalog):
        """truncate defaults to 50 characters"""
        arg = catalog.get_modifier('truncate').get_arg(0)
        assert arg.type == ArgType.NUMBER
        assert arg.default == 50

    def test_fallback_passes_type_through(self, catalog):
        """A modifier without output type keeps the incoming type"""
        fallback = catalog.get_modifier('fallback')
        assert fallback.result_type(ReturnType.NUMBER) == ReturnType.NUMBER

    def test_coerce_return_type(self):
        """String names map to ReturnType"""
        assert coerce_return_type('TEXT') == ReturnType.TEXT
        assert coerce_return_type('bogus') is None


class TestGroupMethods:
    """Tests for group-scoped methods"""

    def test_site_methods(self, catalog):
        """Site exposes query_var and math"""
        assert [m.key for m in catalog.methods_for('site')] == ['query_var', 'math']

    def test_math_returns_number(self, catalog):
        """math() produces a number"""
        assert catalog.get_method('site', 'math').output_type == ReturnType.NUMBER

    def test_methods_for_unknown_group(self, catalog):
        """Unknown group has no methods"""
        assert catalog.methods_for('nope') == []
        assert catalog.get_method('nope', 'meta') is None


class TestFlatTags:
    """Tests for flat_tags"""

    def test_field_entry(self, catalog):
        """Field entries carry full path and breadcrumb"""
        tags = catalog.flat_tags('post')
        title = next(t for t in tags if t['group'] == 'post' and t['key'] == 'title')

        assert title['full_path'] == '@post(title)'
        assert title['breadcrumb'] == 'Post / Title'
        assert title['type'] == 'text'

    def test_method_entry(self, catalog):
        """Method entries use the empty-field syntax"""
        tags = catalog.flat_tags('site')
        query_var = next(t for t in tags if t['key'] == 'query_var')

        assert query_var['full_path'] == '@site().query_var()'
        assert query_var['type'] == 'method'

    def test_flat_tags_respects_context(self, catalog):
        """Groups outside the context are not listed"""
        groups = {t['group'] for t in catalog.flat_tags('site')}
        assert groups == {'site'}


class TestCatalogConstruction:
    """Tests for catalog consistency checks"""

    def test_duplicate_group_rejected(self, product_group):
        """Registering the same group key twice raises"""
        with pytest.raises(CatalogError) as exc_info:
            CatalogRegistry([product_group, product_group])
        assert exc_info.value.key == 'product'

    def test_duplicate_modifier_rejected(self, shout_modifier):
        """Registering the same modifier key twice raises"""
        with pytest.raises(CatalogError):
            CatalogRegistry(modifiers=[shout_modifier, shout_modifier])

    def test_duplicate_field_rejected(self):
        """Field keys are unique within a group"""
        with pytest.raises(CatalogError):
            DataGroup(key='g', fields=(Field('a'), Field('a')))

    def test_alias_to_unknown_field_rejected(self):
        """Aliases must point to a declared field"""
        with pytest.raises(CatalogError):
            DataGroup(key='g', fields=(Field('a'),), aliases={':b': 'b'})

    def test_enum_without_choices_rejected(self):
        """Enum arguments need choices"""
        with pytest.raises(CatalogError):
            ModifierArg('unit', type=ArgType.ENUM)

    def test_duplicate_argument_rejected(self):
        """Argument keys are unique within a modifier"""
        with pytest.raises(CatalogError):
            Modifier(key='m', args=(ModifierArg('a'), ModifierArg('a')))

    def test_extend_returns_new_registry(self, catalog, product_group, shout_modifier):
        """extend() leaves the original registry untouched"""
        extended = catalog.extend([product_group], [shout_modifier])

        assert extended.has_group('product')
        assert extended.has_modifier('shout')
        assert not catalog.has_group('product')

    def test_group_is_immutable(self, product_group):
        """Aliases cannot be changed after construction"""
        with pytest.raises(TypeError):
            product_group.aliases[':x'] = 'name'

    def test_to_dict(self, catalog):
        """Groups serialize with fields on request"""
        data = catalog.get_group('site').to_dict(include_fields=True)

        assert data['key'] == 'site'
        assert 'fields' in data
        assert data['methods'][0]['key'] == 'query_var'
