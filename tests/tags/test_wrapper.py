"""
Tests for wrapper markers
"""

import pytest

from dyntags.tags.wrapper import is_active, side_channel_key, unwrap, wrap


class TestIsActive:
    """Dynamic mode detection"""

    def test_wrapped_value(self):
        """Starts with @tags() and contains @endtags()"""
        assert is_active('@tags()@post(title)@endtags()')

    @pytest.mark.parametrize('value', [
        'Hello',
        '',
        None,
        42,
        '@tags()@post(title)',
        ' @tags()@post(title)@endtags()',
    ])
    def test_inactive_values(self, value):
        """Anything else is a literal"""
        assert not is_active(value)


class TestWrap:
    """wrap / unwrap"""

    def test_wrap(self):
        """Expressions get both markers"""
        assert wrap('@post(title)') == '@tags()@post(title)@endtags()'

    def test_wrap_empty(self):
        """Empty input stays empty"""
        assert wrap('') == ''

    def test_no_double_wrapping(self):
        """An already wrapped value is returned as is"""
        wrapped = wrap('@post(title)')
        assert wrap(wrapped) == wrapped

    def test_idempotent(self):
        """wrap(unwrap(wrap(x))) == wrap(x)"""
        for expression in ['@post(title)', 'Hi @user(first_name)', 'plain']:
            assert wrap(unwrap(wrap(expression))) == wrap(expression)

    def test_half_wrapped_value(self):
        """A value missing only the close marker is completed"""
        assert wrap('@tags()@post(title)') == '@tags()@post(title)@endtags()'

    @pytest.mark.parametrize('expression', [
        'a@tags()b',
        '@tags()a@tags()b',
        'x@tags()',
        '@tag@tags()s()@post(title)',
        'a@endtags()b',
    ])
    def test_single_open_marker(self, expression):
        """Wrapped output holds exactly one open marker"""
        wrapped = wrap(expression)

        assert wrapped.count('@tags()') == 1
        assert is_active(wrapped)
        assert wrap(wrapped) == wrapped

    def test_inner_open_marker_removed(self):
        """Text around an inner marker is kept"""
        assert wrap('a@tags()b') == '@tags()ab@endtags()'

    def test_lone_open_marker(self):
        """A bare open marker has nothing to wrap"""
        assert wrap('@tags()') == ''

    def test_empty_region_clears(self):
        """An empty region unwraps to '' and wraps back to ''"""
        assert is_active('@tags()@endtags()')
        assert wrap(unwrap('@tags()@endtags()')) == ''

    def test_unwrap(self):
        """Content between the markers"""
        assert unwrap('@tags()@post(title).truncate(5)@endtags()') == '@post(title).truncate(5)'

    def test_unwrap_first_close_marker(self):
        """Extraction stops at the first close marker"""
        assert unwrap('@tags()a@endtags()b@endtags()') == 'a'

    def test_unwrap_literal(self):
        """Literals come back unchanged"""
        assert unwrap('Hello') == 'Hello'
        assert unwrap(None) == ''

    def test_side_channel_key(self):
        """<attribute>DynamicTag"""
        assert side_channel_key('width') == 'widthDynamicTag'
