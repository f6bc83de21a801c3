from flask import jsonify

from vitrina.core.logging_service import LoggingService
from vitrina.modules.auth.utils import admin_required

from . import analytics_bp
from .dashboard import get_analytics_result


def add_no_cache_headers(response):
    """Dashboard numbers should never be cached by the browser"""
    response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate, max-age=0'
    response.headers['Pragma'] = 'no-cache'
    return response


@analytics_bp.route('', methods=['GET'])
@admin_required
def get_analytics():
    """Visitor / page view totals for the admin dashboard, or demo data"""
    try:
        result = get_analytics_result()
    except Exception as e:
        LoggingService.log_error_with_traceback('analytics', e)
        return jsonify({'error': 'Failed to fetch analytics data'}), 500

    return add_no_cache_headers(jsonify(result.to_json()))
