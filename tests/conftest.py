"""
Pytest fixtures for dynamic tag tests
"""

import pytest

from dyntags import create_app
from dyntags.config import TestingConfig
from dyntags.tags.catalog import (
    ArgType,
    DataGroup,
    Field,
    Modifier,
    ModifierArg,
    ReturnType,
    create_default_catalog,
)
from dyntags.tags.parser import TagParser


@pytest.fixture
def catalog():
    """Default catalog (post, author, user, site, term)"""
    return create_default_catalog()


@pytest.fixture
def parser(catalog):
    return TagParser(catalog)


@pytest.fixture
def product_group():
    """A host-defined group, used to check catalog extension"""
    return DataGroup(
        key='product',
        label='Product',
        icon='las la-box',
        contexts=('post',),
        fields=(
            Field('price', 'Price', ReturnType.NUMBER),
            Field('name', 'Name', ReturnType.TEXT),
        ),
    )


@pytest.fixture
def shout_modifier():
    """A host-defined modifier with a boolean argument"""
    return Modifier(
        key='shout',
        label='Shout',
        accepted_types=(ReturnType.TEXT,),
        output_type=ReturnType.TEXT,
        args=(ModifierArg('exclaim', 'Add exclamation mark', ArgType.BOOLEAN, default=True),),
        category='text',
    )


@pytest.fixture
def app(catalog):
    """Flask app using the testing config"""
    return create_app(TestingConfig, catalog=catalog)


@pytest.fixture
def client(app):
    return app.test_client()
