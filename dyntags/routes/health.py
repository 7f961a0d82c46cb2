"""
Health check endpoint
"""
from flask import Blueprint, current_app, jsonify
from datetime import datetime, timezone

bp = Blueprint('health', __name__, url_prefix='/api')


@bp.route('/health', methods=['GET'])
def health_check():
    """Healthcheck endpoint: API is online and the tag catalog is loaded"""
    catalog = current_app.extensions.get('dyntags_catalog')

    if catalog is None:
        return jsonify({
            'status': 'unhealthy',
            'message': 'API is online but no tag catalog is loaded',
            'timestamp': datetime.now(timezone.utc).isoformat()
        }), 503

    return jsonify({
        'status': 'healthy',
        'message': 'API is online',
        'groups': len(catalog.list_groups()),
        'modifiers': len(catalog.list_modifiers()),
        'timestamp': datetime.now(timezone.utc).isoformat()
    }), 200
