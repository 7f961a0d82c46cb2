"""
Default data groups.

Contexts:
- post: a content item template (single page, preview card)
- user: a user/profile template
- term: a taxonomy term template
- site: site-wide templates with no content item or visitor
"""

from dyntags.tags.catalog.base import (
    ArgType,
    DataGroup,
    Field,
    Modifier,
    ModifierArg,
    ReturnType,
)

POST_CONTEXT = 'post'
USER_CONTEXT = 'user'
TERM_CONTEXT = 'term'
SITE_CONTEXT = 'site'

ALL_CONTEXTS = (POST_CONTEXT, USER_CONTEXT, TERM_CONTEXT, SITE_CONTEXT)


def _meta_method(label: str) -> Modifier:
    return Modifier(
        key='meta',
        label=label,
        output_type=ReturnType.TEXT,
        args=(ModifierArg('key', 'Meta key', ArgType.TEXT, required=True),),
        category='other',
    )


POST_GROUP = DataGroup(
    key='post',
    label='Post',
    icon='las la-file-alt',
    contexts=(POST_CONTEXT,),
    fields=(
        Field('id', 'ID', ReturnType.NUMBER),
        Field('title', 'Title', ReturnType.TEXT),
        Field('content', 'Content', ReturnType.TEXT),
        Field('excerpt', 'Excerpt', ReturnType.TEXT),
        Field('slug', 'Slug', ReturnType.TEXT),
        Field('permalink', 'Permalink', ReturnType.TEXT),
        Field('edit_link', 'Edit link', ReturnType.TEXT),
        Field('featured_image', 'Featured image', ReturnType.IMAGE),
        Field('gallery', 'Gallery', ReturnType.LIST),
        Field('date_created', 'Date created', ReturnType.DATE),
        Field('date_modified', 'Last modified date', ReturnType.DATE),
        Field('expiration_date', 'Expiration date', ReturnType.DATE),
        Field('priority', 'Priority', ReturnType.NUMBER),
        Field('is_verified', 'Is verified?', ReturnType.BOOLEAN),
        Field('post_type.singular', 'Post type / Singular name', ReturnType.TEXT),
        Field('post_type.plural', 'Post type / Plural name', ReturnType.TEXT),
        Field('status.key', 'Status / Key', ReturnType.TEXT),
        Field('status.label', 'Status / Label', ReturnType.TEXT),
        Field('reviews.total', 'Reviews / Total count', ReturnType.NUMBER),
        Field('reviews.average', 'Reviews / Average rating', ReturnType.NUMBER),
        Field('followers.accepted', 'Followers / Follow count', ReturnType.NUMBER),
        Field('location.full_address', 'Location / Full address', ReturnType.TEXT),
        Field('location.latitude', 'Location / Latitude', ReturnType.NUMBER),
        Field('location.longitude', 'Location / Longitude', ReturnType.NUMBER),
    ),
    methods=(_meta_method('Post meta'),),
    aliases={':id': 'id', ':title': 'title', ':url': 'permalink', ':image': 'featured_image'},
)

AUTHOR_GROUP = DataGroup(
    key='author',
    label='Author',
    icon='las la-user-edit',
    contexts=(POST_CONTEXT,),
    fields=(
        Field('id', 'ID', ReturnType.NUMBER),
        Field('username', 'Username', ReturnType.TEXT),
        Field('display_name', 'Display name', ReturnType.TEXT),
        Field('email', 'Email', ReturnType.TEXT),
        Field('avatar', 'Avatar', ReturnType.IMAGE),
        Field('first_name', 'First name', ReturnType.TEXT),
        Field('last_name', 'Last name', ReturnType.TEXT),
        Field('profile_url', 'Profile URL', ReturnType.TEXT),
        Field('is_verified', 'Is verified?', ReturnType.BOOLEAN),
        Field('profile.bio', 'Profile / Bio', ReturnType.TEXT),
        Field('profile.website', 'Profile / Website', ReturnType.TEXT),
        Field('role.label', 'Role / Label', ReturnType.TEXT),
    ),
    methods=(_meta_method('User meta'),),
)

USER_GROUP = DataGroup(
    key='user',
    label='User',
    icon='las la-user',
    contexts=(POST_CONTEXT, USER_CONTEXT, TERM_CONTEXT),
    fields=(
        Field('id', 'ID', ReturnType.NUMBER),
        Field('username', 'Username', ReturnType.TEXT),
        Field('display_name', 'Display name', ReturnType.TEXT),
        Field('email', 'Email', ReturnType.TEXT),
        Field('avatar', 'Avatar', ReturnType.IMAGE),
        Field('first_name', 'First name', ReturnType.TEXT),
        Field('last_name', 'Last name', ReturnType.TEXT),
        Field('profile_id', 'Profile ID', ReturnType.NUMBER),
        Field('profile_url', 'Profile URL', ReturnType.TEXT),
        Field('is_verified', 'Is verified?', ReturnType.BOOLEAN),
        Field('is_logged_in', 'Is logged in?', ReturnType.BOOLEAN),
        Field('roles', 'Roles', ReturnType.LIST),
        Field('profile.bio', 'Profile / Bio', ReturnType.TEXT),
        Field('profile.website', 'Profile / Website', ReturnType.TEXT),
    ),
    methods=(_meta_method('User meta'),),
)

SITE_GROUP = DataGroup(
    key='site',
    label='Site',
    icon='las la-globe',
    contexts=ALL_CONTEXTS,
    fields=(
        Field('title', 'Title', ReturnType.TEXT),
        Field('tagline', 'Tagline', ReturnType.TEXT),
        Field('logo', 'Logo', ReturnType.IMAGE),
        Field('url', 'URL', ReturnType.TEXT),
        Field('admin_url', 'WP Admin URL', ReturnType.TEXT),
        Field('login_url', 'Login URL', ReturnType.TEXT),
        Field('register_url', 'Register URL', ReturnType.TEXT),
        Field('logout_url', 'Logout URL', ReturnType.TEXT),
        Field('current_plan_url', 'Current plan URL', ReturnType.TEXT),
        Field('language', 'Language', ReturnType.TEXT),
        Field('date', 'Date', ReturnType.DATE),
    ),
    methods=(
        Modifier(
            key='query_var',
            label='Query variable',
            output_type=ReturnType.TEXT,
            args=(ModifierArg('name', 'Variable name', ArgType.TEXT, required=True),),
        ),
        Modifier(
            key='math',
            label='Math expression',
            output_type=ReturnType.NUMBER,
            args=(ModifierArg('expression', 'Math expression', ArgType.TEXT, required=True),),
        ),
    ),
)

TERM_GROUP = DataGroup(
    key='term',
    label='Term',
    icon='las la-tag',
    contexts=(TERM_CONTEXT,),
    fields=(
        Field('id', 'ID', ReturnType.NUMBER),
        Field('label', 'Label', ReturnType.TEXT),
        Field('slug', 'Slug', ReturnType.TEXT),
        Field('description', 'Description', ReturnType.TEXT),
        Field('icon', 'Icon', ReturnType.TEXT),
        Field('link', 'Link', ReturnType.TEXT),
        Field('image', 'Image', ReturnType.IMAGE),
        Field('color', 'Color', ReturnType.TEXT),
        Field('post_count', 'Post count', ReturnType.NUMBER),
        Field('parent.label', 'Parent / Label', ReturnType.TEXT),
        Field('taxonomy.label', 'Taxonomy / Label', ReturnType.TEXT),
    ),
    aliases={
        ':id': 'id',
        ':label': 'label',
        ':name': 'label',
        ':slug': 'slug',
        ':description': 'description',
        ':icon': 'icon',
        ':url': 'link',
        ':link': 'link',
        ':image': 'image',
        ':color': 'color',
    },
)

DEFAULT_GROUPS = (POST_GROUP, AUTHOR_GROUP, USER_GROUP, SITE_GROUP, TERM_GROUP)
