"""
Analytics dashboard data.

The admin dashboard always receives a full payload. When Google Analytics is
not configured, or the API call fails, demo numbers are returned and the
result status says why.
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict, Optional

from vitrina.core.config import get_config_value
from vitrina.core.logging_service import LoggingService

from .ga_client import fetch_ga_stats, percent_change

STATUS_OK = 'ok'
STATUS_NOT_CONFIGURED = 'not_configured'
STATUS_UPSTREAM_ERROR = 'upstream_error'

NOT_CONFIGURED_NOTE = (
    'Demo data. To see real data, set GA_PROPERTY_ID, GA_SERVICE_ACCOUNT_EMAIL and GA_PRIVATE_KEY.'
)
UPSTREAM_ERROR_NOTE = 'Failed to fetch from Google Analytics API. Showing demo data.'

DEMO_PAYLOAD = {
    'visitors': {'total': 1234, 'change': 12},
    'pageViews': {'total': 5678, 'change': 8},
    'clicks': {'total': 2345, 'change': 15},
    'growth': {'value': '+23%', 'change': '+5%'},
    'popularPages': [
        {'page': '/', 'views': 1234},
        {'page': '/services', 'views': 856},
        {'page': '/case-studies', 'views': 642},
        {'page': '/story', 'views': 421},
    ],
    'recentActivity': [],
}


@dataclass
class AnalyticsResult:
    """Ok(data) | NotConfigured | UpstreamError(reason)"""
    status: str
    data: Dict[str, Any]
    note: Optional[str] = None
    api_error: Optional[str] = None
    api_error_code: Any = None

    @property
    def is_demo(self):
        return self.status != STATUS_OK

    def to_json(self):
        payload = dict(self.data)
        payload['status'] = self.status
        payload['isDemo'] = self.is_demo
        if self.note:
            payload['note'] = self.note
        if self.api_error is not None:
            payload['apiError'] = self.api_error
        if self.api_error_code is not None:
            payload['apiErrorCode'] = self.api_error_code
        return payload


def demo_payload():
    return copy.deepcopy(DEMO_PAYLOAD)


def _signed_percent(value):
    return f"{'+' if value > 0 else ''}{value}%"


def build_live_payload(stats):
    """Dashboard payload from fetch_ga_stats() numbers"""
    visitors_change = percent_change(stats['visitors'], stats['previousVisitors'])
    page_views_change = percent_change(stats['pageViews'], stats['previousPageViews'])
    return {
        'visitors': {'total': stats['visitors'], 'change': visitors_change},
        'pageViews': {'total': stats['pageViews'], 'change': page_views_change},
        # GA4 has no direct click total
        'clicks': {'total': 0, 'change': 0},
        'growth': {
            'value': _signed_percent(visitors_change),
            'change': _signed_percent(page_views_change),
        },
        'popularPages': stats['popularPages'],
        'recentActivity': [],
    }


def ga_credentials():
    """(property_id, client_email, private_key) or None when any is missing"""
    property_id = get_config_value('GA_PROPERTY_ID')
    client_email = get_config_value('GA_SERVICE_ACCOUNT_EMAIL')
    private_key = get_config_value('GA_PRIVATE_KEY')
    if not property_id or not client_email or not private_key:
        return None
    return property_id, client_email, private_key


def _error_code(error):
    code = getattr(error, 'code', None)
    if code is None or isinstance(code, (int, str)):
        return code
    return str(code)


def get_analytics_result(today=None):
    credentials = ga_credentials()
    if credentials is None:
        return AnalyticsResult(STATUS_NOT_CONFIGURED, demo_payload(), note=NOT_CONFIGURED_NOTE)

    try:
        stats = fetch_ga_stats(*credentials, today=today)
    except Exception as e:
        LoggingService.error('analytics', f"Google Analytics API error: {e}", {
            'error_type': type(e).__name__,
            'code': _error_code(e),
        })
        return AnalyticsResult(
            STATUS_UPSTREAM_ERROR,
            demo_payload(),
            note=UPSTREAM_ERROR_NOTE,
            api_error=getattr(e, 'message', None) or str(e),
            api_error_code=_error_code(e),
        )

    return AnalyticsResult(STATUS_OK, build_live_payload(stats))
