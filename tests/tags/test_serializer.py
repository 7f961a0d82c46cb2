"""
Tests for the tag serializer
"""

import pytest

from dyntags.tags.parser import AppliedModifierNode, DocumentNode, TextNode, TokenNode
from dyntags.tags.serializer import (
    format_argument,
    serialize,
    serialize_expression,
    serialize_token,
    token_breadcrumb,
)


class TestFormatArgument:
    """Argument rendering"""

    def test_booleans(self):
        """Booleans render bare"""
        assert format_argument(True) == 'true'
        assert format_argument(False) == 'false'

    def test_numbers(self):
        """Numbers render unquoted"""
        assert format_argument(50) == '50'
        assert format_argument(2.5) == '2.5'

    def test_text_is_quoted(self):
        """Text renders in double quotes"""
        assert format_argument('...') == '"..."'

    def test_text_escaping(self):
        """Quotes and backslashes are escaped"""
        assert format_argument('say "hi" \\o/') == r'"say \"hi\" \\o/"'


class TestSerialize:
    """Document rendering"""

    def test_single_token(self):
        """A token is wrapped with the markers"""
        document = DocumentNode(children=[TokenNode(group='post', field='title')])
        assert serialize(document) == '@tags()@post(title)@endtags()'

    def test_modifiers_always_have_parentheses(self):
        """Modifiers without arguments keep ()"""
        token = TokenNode(group='post', field='title', modifiers=[
            AppliedModifierNode(key='capitalize'),
            AppliedModifierNode(key='truncate', args=[50]),
            AppliedModifierNode(key='replace', args=['a', 'b']),
        ])
        assert serialize_token(token) == '@post(title).capitalize().truncate(50).replace("a","b")'

    def test_text_only_document_is_not_wrapped(self):
        """A document without tokens serializes to its literal text"""
        document = DocumentNode(children=[TextNode(content='Plain')])
        assert serialize(document) == 'Plain'

    def test_empty_document(self):
        """An empty document serializes to ''"""
        assert serialize(DocumentNode()) == ''

    def test_expression_without_markers(self):
        """serialize_expression leaves the markers out"""
        document = DocumentNode(children=[
            TextNode(content='By '),
            TokenNode(group='author', field='display_name'),
        ])
        assert serialize_expression(document) == 'By @author(display_name)'

    def test_text_starting_with_open_marker(self):
        """Tokens always get their own wrapper, whatever the text looks like"""
        document = DocumentNode(children=[
            TextNode(content='@tags()'),
            TokenNode(group='post', field='title'),
        ])
        assert serialize(document) == '@tags()@tags()@post(title)@endtags()'


class TestRoundTrip:
    """parse(serialize(d)) == d"""

    @pytest.mark.parametrize('value', [
        '@tags()@post(title)@endtags()',
        '@tags()@post(title).truncate(50)@endtags()',
        '@tags()Hi @user(first_name).capitalize(), welcome!@endtags()',
        '@tags()@post(priority).currency_format("EUR",true).append(" total")@endtags()',
        '@tags()@post(title).append("say \\"hi\\" \\\\o/")@endtags()',
        '@tags()@site().query_var("page").fallback("1")@endtags()',
        '@tags()@post(:url)@endtags()',
        '@tags()@post(priority).round(1.5)@endtags()',
        '@tags()Line 1\n@post(title)\nLine 3@endtags()',
        '@tags()@post(title).sparkle("3","x")@endtags()',
        '@tags()@product(sku).is_between("1","10")@endtags()',
        '@tags()@post(title)@endtags() @post(id)',
        '@tags()plain@endtags() tail',
        'a@tags()x@endtags()',
        'see @tags()@post(title)@endtags()',
    ])
    def test_round_trip(self, parser, value):
        """Canonical values parse and serialize back unchanged"""
        document = parser.parse(value)
        assert serialize(document) == value
        assert parser.parse(serialize(document)) == document

    def test_canonicalization(self, parser):
        """Non-canonical spacing and quoting are normalized once"""
        document = parser.parse("@tags()@post(title).truncate( 20 ).append( '...' )@endtags()")
        canonical = serialize(document)

        assert canonical == '@tags()@post(title).truncate(20).append("...")@endtags()'
        assert serialize(parser.parse(canonical)) == canonical

    def test_degraded_text_round_trips(self, parser):
        """Degraded fragments are kept verbatim"""
        value = '@tags()@post(title) and @post(broken@endtags()'
        document = parser.parse(value)

        assert serialize(document) == value
        assert parser.parse(serialize(document)) == document

    def test_trailing_reference_stays_literal(self, parser):
        """A reference after the close marker never becomes a token"""
        document = parser.parse('@tags()@post(title)@endtags() @post(id)')
        again = parser.parse(serialize(document))

        assert len(again.tokens()) == 1
        assert again == document

    def test_trailing_text_is_written_after_close_marker(self):
        """trailing goes after @endtags(), even without tokens"""
        document = DocumentNode(children=[TextNode(content='plain')], trailing=' tail')
        assert serialize(document) == '@tags()plain@endtags() tail'
        assert serialize_expression(document) == 'plain'

    def test_literal_value_round_trips(self, parser):
        """Literals stay literals"""
        assert serialize(parser.parse('Just text')) == 'Just text'


class TestBreadcrumb:
    """token_breadcrumb"""

    def test_known_field(self, catalog):
        """Uses catalog labels"""
        assert token_breadcrumb(TokenNode(group='post', field='title'), catalog) == 'Post / Title'

    def test_alias_field(self, catalog):
        """Aliases show the label of their field"""
        assert token_breadcrumb(TokenNode(group='post', field=':url'), catalog) == 'Post / Permalink'

    def test_method(self, catalog):
        """Group methods use the method label"""
        token = TokenNode(group='site', modifiers=[AppliedModifierNode(key='query_var', args=['q'])])
        assert token_breadcrumb(token, catalog) == 'Site / Query variable'

    def test_unknown_keys_are_humanized(self, catalog):
        """Unknown keys fall back to readable names"""
        token = TokenNode(group='product', field='sale_price')
        assert token_breadcrumb(token, catalog) == 'Product / Sale price'
