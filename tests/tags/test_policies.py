"""
Tests for storage policies
"""

from dyntags.tags.policies import SideChannelPolicy, WholeValuePolicy, disable_tags, open_builder
from dyntags.tags.session import SessionState


class TestWholeValuePolicy:
    """The attribute itself holds the wrapped expression"""

    def test_literal_value(self):
        """A literal is not dynamic and is used as is"""
        policy = WholeValuePolicy('title')
        attributes = {'title': 'Hello'}

        assert not policy.is_dynamic(attributes)
        assert policy.expression(attributes) == ''
        assert policy.effective(attributes) == 'Hello'

    def test_dynamic_value(self):
        """A wrapped value is dynamic"""
        policy = WholeValuePolicy('title')
        attributes = {'title': '@tags()@post(title)@endtags()'}

        assert policy.is_dynamic(attributes)
        assert policy.expression(attributes) == '@post(title)'

    def test_write_and_clear(self):
        """Updates target the attribute itself"""
        policy = WholeValuePolicy('title')

        assert policy.write('@tags()@post(title)@endtags()') == {'title': '@tags()@post(title)@endtags()'}
        assert policy.clear() == {'title': ''}

    def test_builder_round_trip(self, catalog):
        """Open, edit, commit, write"""
        policy = WholeValuePolicy('title')
        session = policy.open_builder({'title': 'Welcome'}, 'post', catalog)

        assert session.text == 'Welcome'
        session.set_text('Welcome @user(first_name)')
        updates = policy.write(session.commit())

        assert updates == {'title': '@tags()Welcome @user(first_name)@endtags()'}

    def test_non_string_value(self, catalog):
        """Structured literals (image objects) open an empty builder"""
        policy = WholeValuePolicy('image')
        session = policy.open_builder({'image': {'id': 12}}, 'post', catalog)
        assert session.text == ''


class TestSideChannelPolicy:
    """The expression lives next to a strictly typed literal"""

    def test_key(self):
        """Stored under <attribute>DynamicTag"""
        assert SideChannelPolicy('width').key == 'widthDynamicTag'

    def test_override_wins(self):
        """A non-empty override takes precedence"""
        policy = SideChannelPolicy('width')
        attributes = {'width': 300, 'widthDynamicTag': '@tags()@post(priority)@endtags()'}

        assert policy.is_dynamic(attributes)
        assert policy.effective(attributes) == '@tags()@post(priority)@endtags()'
        assert policy.expression(attributes) == '@post(priority)'

    def test_unwrapped_override(self):
        """The override may be stored without markers"""
        policy = SideChannelPolicy('width')
        attributes = {'width': 300, 'widthDynamicTag': '@post(priority)'}

        assert policy.is_dynamic(attributes)
        assert policy.expression(attributes) == '@post(priority)'

    def test_cleared_override_falls_back(self):
        """Without an override the literal applies"""
        policy = SideChannelPolicy('width')

        assert policy.effective({'width': 300, 'widthDynamicTag': ''}) == 300
        assert policy.effective({'width': 300}) == 300

    def test_write_and_clear_leave_literal_alone(self):
        """Updates only touch the side channel"""
        policy = SideChannelPolicy('width')

        assert policy.write('@tags()@post(priority)@endtags()') == {
            'widthDynamicTag': '@tags()@post(priority)@endtags()'
        }
        assert policy.clear() == {'widthDynamicTag': ''}

    def test_builder_seeded_from_override(self, catalog):
        """The builder edits the override, not the literal"""
        policy = SideChannelPolicy('width')
        session = policy.open_builder(
            {'width': 300, 'widthDynamicTag': '@tags()@post(priority)@endtags()'},
            'post',
            catalog,
        )

        assert session.text == '@post(priority)'
        assert session.label == 'width'


class TestEntryPoints:
    """open_builder / disable_tags"""

    def test_open_builder(self, catalog):
        """open_builder returns an open session"""
        session = open_builder('Title', '@tags()@post(title)@endtags()', 'post', catalog)

        assert session.state == SessionState.OPEN
        assert session.label == 'Title'

    def test_disable_tags(self):
        """Disabling tags clears the control"""
        assert disable_tags() == ''
