"""
Dynamic Data API

Exposes the tag catalog and the engine to editor front-ends. Nothing here
resolves values: responses describe what can be written and what was
written, never what it renders to.
"""

from flask import Blueprint, current_app, jsonify, request
import logging

from dyntags.tags.parser import TagParser
from dyntags.tags.serializer import serialize, token_breadcrumb
from dyntags.tags.session import open_session
from dyntags.tags.validator import TagValidator
from dyntags.tags.wrapper import is_active, unwrap

logger = logging.getLogger(__name__)

dynamic_data_bp = Blueprint('dynamic_data', __name__, url_prefix='/api/dynamic-data')


def _catalog():
    return current_app.extensions['dyntags_catalog']


def _context(value=None):
    return value or current_app.config.get('DYNTAGS_DEFAULT_CONTEXT', 'post')


@dynamic_data_bp.route('/groups', methods=['GET'])
def list_groups():
    """
    List data groups.

    GET /api/dynamic-data/groups?context=post   -> groups usable in a context
    GET /api/dynamic-data/groups?group=post     -> one group with fields and methods
    """
    catalog = _catalog()
    group_key = request.args.get('group')

    if group_key:
        group = catalog.get_group(group_key)
        if not group:
            return jsonify({'error': f"Data group '{group_key}' not found"}), 404
        return jsonify({'group': group.to_dict(include_fields=True)})

    context = _context(request.args.get('context'))
    return jsonify({
        'context': context,
        'groups': [group.to_dict() for group in catalog.groups_for(context)]
    })


@dynamic_data_bp.route('/modifiers', methods=['GET'])
def list_modifiers():
    """
    List modifiers, optionally only those accepting a type.

    GET /api/dynamic-data/modifiers?type=text
    """
    catalog = _catalog()
    return_type = request.args.get('type')

    if return_type:
        modifiers = catalog.modifiers_for(return_type)
    else:
        modifiers = catalog.list_modifiers()

    return jsonify({'modifiers': [modifier.to_dict() for modifier in modifiers]})


@dynamic_data_bp.route('/tags-flat', methods=['GET'])
def list_flat_tags():
    """
    Every field and group method of a context as a flat list, for autocomplete.

    GET /api/dynamic-data/tags-flat?context=post
    """
    context = _context(request.args.get('context'))
    return jsonify({'context': context, 'tags': _catalog().flat_tags(context)})


@dynamic_data_bp.route('/inspect', methods=['POST'])
def inspect_value():
    """
    Parse and validate a stored value.

    POST /api/dynamic-data/inspect

    Request Body:
    {
        "value": "@tags()@post(title).truncate(50)@endtags()",
        "context": "post"
    }

    Response:
    {
        "active": true,
        "expression": "@post(title).truncate(50)",
        "document": {"children": [...], "trailing": ""},
        "tokens": [{"group": "post", "field": "title", "breadcrumb": "Post / Title", ...}],
        "diagnostics": [],
        "canonical": "@tags()@post(title).truncate(50)@endtags()"
    }
    """
    data = request.get_json(silent=True) or {}
    value = data.get('value')
    context = _context(data.get('context'))

    if value is not None and not isinstance(value, str):
        return jsonify({'error': 'value must be a string'}), 400

    try:
        catalog = _catalog()
        document = TagParser(catalog).parse(value or '', context)
        diagnostics = TagValidator(catalog).validate(document, context)

        tokens = []
        for token in document.tokens():
            entry = token.to_dict()
            entry['breadcrumb'] = token_breadcrumb(token, catalog)
            tokens.append(entry)

        return jsonify({
            'active': is_active(value),
            'expression': unwrap(value) if is_active(value) else '',
            'document': document.to_dict(),
            'tokens': tokens,
            'diagnostics': [d.to_dict() for d in diagnostics],
            'canonical': serialize(document),
        })

    except Exception as e:
        logger.exception(f"Error inspecting dynamic value: {e}")
        return jsonify({'error': 'Failed to inspect value'}), 500


@dynamic_data_bp.route('/suggest', methods=['POST'])
def suggest():
    """
    Autocomplete for an expression being typed.

    POST /api/dynamic-data/suggest

    Request Body:
    {
        "value": "@post(title).tr",    # wrapped or unwrapped
        "cursor": 15,                  # offset in the unwrapped expression, defaults to its end
        "context": "post"
    }
    """
    data = request.get_json(silent=True) or {}
    value = data.get('value') or ''
    context = _context(data.get('context'))
    cursor = data.get('cursor')

    if not isinstance(value, str):
        return jsonify({'error': 'value must be a string'}), 400
    if cursor is not None and (isinstance(cursor, bool) or not isinstance(cursor, int)):
        return jsonify({'error': 'cursor must be an integer'}), 400

    session = open_session(value, context, _catalog())
    expression = session.text
    if cursor is None:
        cursor = len(expression)

    suggestions = session.suggest_at(cursor)
    session.cancel()

    result = suggestions.to_dict()
    result['expression'] = expression
    return jsonify(result)
