"""
Derived views over projects and their content items.
"""
from typing import Iterable, List, Optional, Union

from src.specs.common.enums import ContentStatus, Platform, PlatformFilter
from src.specs.models.domain import ContentDocument, ProjectDocument

ALL = PlatformFilter.ALL.value


def _value(option: Union[str, PlatformFilter, Platform, ContentStatus, None]) -> Optional[str]:
    if option is None:
        return None
    return option.value if hasattr(option, "value") else str(option)


def filter_by_platform(
    projects: Iterable[ProjectDocument],
    platform: Union[str, PlatformFilter, Platform, None],
) -> List[ProjectDocument]:
    """All projects when `platform` is "All" (or None), else exact platform matches."""
    wanted = _value(platform)
    if wanted is None or wanted == ALL:
        return list(projects)
    return [project for project in projects if project.platform.value == wanted]


def filter_contents(
    contents: Iterable[ContentDocument],
    search_text: Optional[str] = "",
    status_filter: Union[str, ContentStatus, None] = ALL,
) -> List[ContentDocument]:
    # search matches copy only, case-insensitively; both predicates must hold
    needle = (search_text or "").lower()
    status = _value(status_filter)
    return [
        content
        for content in contents
        if needle in (content.copyText or "").lower()
        and (status is None or status == ALL or content.status.value == status)
    ]


def sort_by_publish_date(contents: Iterable[ContentDocument]) -> List[ContentDocument]:
    """Ascending by publishDate; sorted() is stable so ties keep input order."""
    return sorted(contents, key=lambda content: content.publishDate)
