"""Tidying of outgoing search filters."""
from dataclasses import replace
from typing import Optional

from ..logging import get_logger
from ..models import ContentFilter, DateFilter, Filter

logger = get_logger('gphotospy.paging')


def normalize_filter(filter: Filter, exclude_non_app_created: bool = False) -> Filter:
    """
    Return a copy of ``filter`` without inert nodes.

    Empty category, date, media type and feature lists become None, and a
    sub-filter left with nothing is dropped so it is not serialized. The
    caller's filter is not modified.

    Args:
        filter: Filter to tidy
        exclude_non_app_created: Copied into ``exclude_non_app_created_data``
            when True

    Returns:
        A new Filter
    """
    content_filter: Optional[ContentFilter] = filter.content_filter
    if content_filter is not None:
        content_filter = ContentFilter(
            included_content_categories=list(content_filter.included_content_categories or []) or None,
            excluded_content_categories=list(content_filter.excluded_content_categories or []) or None
        )
        if content_filter.is_empty():
            logger.debug("contentFilter element empty so removed from outgoing request")
            content_filter = None

    date_filter: Optional[DateFilter] = filter.date_filter
    if date_filter is not None:
        date_filter = DateFilter(
            dates=list(date_filter.dates or []) or None,
            ranges=list(date_filter.ranges or []) or None
        )
        if date_filter.is_empty():
            logger.debug("dateFilter element empty so removed from outgoing request")
            date_filter = None

    media_type_filter = filter.media_type_filter
    if media_type_filter is not None and media_type_filter.is_empty():
        logger.debug("mediaTypeFilter element empty so removed from outgoing request")
        media_type_filter = None

    feature_filter = filter.feature_filter
    if feature_filter is not None and feature_filter.is_empty():
        logger.debug("featureFilter element empty so removed from outgoing request")
        feature_filter = None

    result = replace(
        filter,
        content_filter=content_filter,
        date_filter=date_filter,
        media_type_filter=media_type_filter,
        feature_filter=feature_filter
    )
    if exclude_non_app_created:
        result = replace(result, exclude_non_app_created_data=True)
    return result
