"""
Search filter models for mediaItems:search.
"""
import datetime as _dt
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .enums import ContentCategory, Feature, MediaType


@dataclass(frozen=True)
class Date:
    """
    A calendar date. ``month`` and ``day`` may be 0 to match a whole
    year or month.
    """
    year: int = 0
    month: int = 0
    day: int = 0

    @classmethod
    def from_date(cls, value: _dt.date) -> 'Date':
        return cls(year=value.year, month=value.month, day=value.day)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Date':
        return cls(year=data.get('year', 0), month=data.get('month', 0), day=data.get('day', 0))

    def to_dict(self) -> Dict[str, int]:
        return {'year': self.year, 'month': self.month, 'day': self.day}


@dataclass(frozen=True)
class DateRange:
    start_date: Date
    end_date: Date

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DateRange':
        return cls(
            start_date=Date.from_dict(data.get('startDate') or {}),
            end_date=Date.from_dict(data.get('endDate') or {})
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'startDate': self.start_date.to_dict(), 'endDate': self.end_date.to_dict()}


@dataclass
class DateFilter:
    """Matches items by exact dates and/or date ranges."""
    dates: Optional[List[Date]] = None
    ranges: Optional[List[DateRange]] = None

    def is_empty(self) -> bool:
        return not self.dates and not self.ranges

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.dates is not None:
            result['dates'] = [d.to_dict() for d in self.dates]
        if self.ranges is not None:
            result['ranges'] = [r.to_dict() for r in self.ranges]
        return result


@dataclass
class ContentFilter:
    included_content_categories: Optional[List[ContentCategory]] = None
    excluded_content_categories: Optional[List[ContentCategory]] = None

    def is_empty(self) -> bool:
        return not self.included_content_categories and not self.excluded_content_categories

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        if self.included_content_categories is not None:
            result['includedContentCategories'] = [c.value for c in self.included_content_categories]
        if self.excluded_content_categories is not None:
            result['excludedContentCategories'] = [c.value for c in self.excluded_content_categories]
        return result


@dataclass
class MediaTypeFilter:
    media_types: Optional[List[MediaType]] = None

    def is_empty(self) -> bool:
        return not self.media_types

    def to_dict(self) -> Dict[str, Any]:
        if self.media_types is None:
            return {}
        return {'mediaTypes': [m.value for m in self.media_types]}


@dataclass
class FeatureFilter:
    included_features: Optional[List[Feature]] = None

    def is_empty(self) -> bool:
        return not self.included_features

    def to_dict(self) -> Dict[str, Any]:
        if self.included_features is None:
            return {}
        return {'includedFeatures': [f.value for f in self.included_features]}


@dataclass
class Filter:
    """
    Filters for mediaItems:search.

    Sub-filters left as None are not sent. Use
    ``gphotospy.core.paging.normalize_filter`` to drop empty ones.

    Example:
        >>> f = Filter(media_type_filter=MediaTypeFilter([MediaType.VIDEO]))
        >>> f.to_dict()
        {'mediaTypeFilter': {'mediaTypes': ['VIDEO']}}
    """
    content_filter: Optional[ContentFilter] = None
    date_filter: Optional[DateFilter] = None
    media_type_filter: Optional[MediaTypeFilter] = None
    feature_filter: Optional[FeatureFilter] = None
    include_archived_media: Optional[bool] = None
    exclude_non_app_created_data: Optional[bool] = None

    @classmethod
    def for_date_range(cls, start: _dt.date, end: _dt.date) -> 'Filter':
        """Filter matching items created between two dates, inclusive."""
        return cls(date_filter=DateFilter(ranges=[
            DateRange(start_date=Date.from_date(start), end_date=Date.from_date(end))
        ]))

    @classmethod
    def for_categories(cls, *categories: ContentCategory) -> 'Filter':
        return cls(content_filter=ContentFilter(included_content_categories=list(categories)))

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, sub in (
            ('contentFilter', self.content_filter),
            ('dateFilter', self.date_filter),
            ('mediaTypeFilter', self.media_type_filter),
            ('featureFilter', self.feature_filter),
        ):
            if sub is not None:
                result[key] = sub.to_dict()
        if self.include_archived_media is not None:
            result['includeArchivedMedia'] = self.include_archived_media
        if self.exclude_non_app_created_data is not None:
            result['excludeNonAppCreatedData'] = self.exclude_non_app_created_data
        return result
