"""Domain Types: verifies identity wrappers, limits and the segment catalog.

Tests:
    - NewType wrappers are transparent at runtime
    - SegmentType values are the stable integers 1..6
    - Descriptions and real-time monitoring support per segment
"""

from results_service.core.domain_types import (
    ItemId, ExternalItemId, PlatformId,
    DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE,
    SegmentType,
)


def test_identity_types_wrap_primitives():
    assert ItemId(7) == 7
    assert ExternalItemId("ml-123") == "ml-123"
    assert PlatformId(3) == 3


def test_page_size_default_within_max():
    assert 0 < DEFAULT_PAGE_SIZE <= MAX_PAGE_SIZE


def test_segment_values_are_stable():
    assert [s.value for s in SegmentType] == [1, 2, 3, 4, 5, 6]
    assert SegmentType(5) is SegmentType.NFT


def test_every_segment_has_description():
    for segment in SegmentType:
        assert segment.description
    assert SegmentType.MARKETPLACE.description == "Online Marketplaces"
    assert SegmentType.APPS.description == "App Stores"


def test_real_time_monitoring_excludes_social_media_and_apps():
    unsupported = {s for s in SegmentType if not s.supports_real_time_monitoring}
    assert unsupported == {SegmentType.SOCIAL_MEDIA, SegmentType.APPS}
