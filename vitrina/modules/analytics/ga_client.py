"""
Google Analytics Data API client.

Pulls 30-day visitor / page view totals for the current and previous window
plus the most viewed pages, using a service account.
"""

import math
from datetime import date, timedelta

WINDOW_DAYS = 30
TOP_PAGES_LIMIT = 10
TOKEN_URI = 'https://oauth2.googleapis.com/token'


def percent_change(current, previous):
    """Whole-number percent change, 0 when there is no previous value (halves round up)"""
    if previous <= 0:
        return 0
    return int(math.floor((current - previous) / previous * 100 + 0.5))


def reporting_windows(today=None):
    """(current_start, previous_start, previous_end) as YYYY-MM-DD strings.
    The current window runs to 'today'."""
    today = today or date.today()
    window_start = today - timedelta(days=WINDOW_DAYS)
    previous_start = today - timedelta(days=WINDOW_DAYS * 2)
    return window_start.isoformat(), previous_start.isoformat(), window_start.isoformat()


def _client(client_email, private_key):
    from google.analytics.data_v1beta import BetaAnalyticsDataClient
    from google.oauth2 import service_account

    credentials = service_account.Credentials.from_service_account_info({
        'type': 'service_account',
        'client_email': client_email,
        'private_key': private_key.replace('\\n', '\n'),
        'token_uri': TOKEN_URI,
    })
    return BetaAnalyticsDataClient(credentials=credentials)


def _metric_total(client, prop, metric, start_date, end_date):
    from google.analytics.data_v1beta.types import DateRange, Metric, RunReportRequest

    response = client.run_report(RunReportRequest(
        property=prop,
        date_ranges=[DateRange(start_date=start_date, end_date=end_date)],
        metrics=[Metric(name=metric)],
    ))
    if not response.rows:
        return 0
    return int(response.rows[0].metric_values[0].value or 0)


def _top_pages(client, prop, start_date):
    from google.analytics.data_v1beta.types import DateRange, Dimension, Metric, OrderBy, RunReportRequest

    response = client.run_report(RunReportRequest(
        property=prop,
        date_ranges=[DateRange(start_date=start_date, end_date='today')],
        dimensions=[Dimension(name='pagePath')],
        metrics=[Metric(name='screenPageViews')],
        order_bys=[OrderBy(metric=OrderBy.MetricOrderBy(metric_name='screenPageViews'), desc=True)],
        limit=TOP_PAGES_LIMIT,
    ))
    return [
        {
            'page': row.dimension_values[0].value or '/',
            'views': int(row.metric_values[0].value or 0),
        }
        for row in response.rows
    ]


def fetch_ga_stats(property_id, client_email, private_key, today=None):
    """
    Query GA4 for the dashboard numbers.

    Returns:
        dict with visitors, previousVisitors, pageViews, previousPageViews, popularPages

    Raises whatever the Google client raises (google.api_core.exceptions.GoogleAPIError,
    google.auth.exceptions.GoogleAuthError, ValueError for a malformed key).
    """
    client = _client(client_email, private_key)
    prop = f"properties/{property_id}"
    current_start, previous_start, previous_end = reporting_windows(today)

    return {
        'visitors': _metric_total(client, prop, 'activeUsers', current_start, 'today'),
        'previousVisitors': _metric_total(client, prop, 'activeUsers', previous_start, previous_end),
        'pageViews': _metric_total(client, prop, 'screenPageViews', current_start, 'today'),
        'previousPageViews': _metric_total(client, prop, 'screenPageViews', previous_start, previous_end),
        'popularPages': _top_pages(client, prop, current_start),
    }
