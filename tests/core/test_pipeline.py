# ABOUTME: Tests for the aggregation pipeline from source results to combined document
# ABOUTME: Validates merge order, deduplication across sources and the nothing-found state

from course_scraper.core.models import (
    ContentCollection,
    ExtractionResult,
    FlipCard,
    Hotspot,
    HotspotPoint,
    Metadata,
    TextBlock,
)
from course_scraper.core.pipeline import AggregationPipeline


def _result(metadata: Metadata, blocks: list[str], hotspot_titles: list[str] | None = None) -> ExtractionResult:
    hotspots = []
    if hotspot_titles:
        hotspots = [Hotspot(points=[HotspotPoint(title=title, description="Detail") for title in hotspot_titles])]
    content = ContentCollection(text_blocks=[TextBlock(content=text) for text in blocks], hotspots=hotspots)
    return ExtractionResult(success=True, metadata=metadata, content=content)


class TestAggregationPipeline:
    """Test a full pipeline run."""

    def test_combines_sources_in_priority_order(self):
        """Test metadata priority, cross-source dedup and statistics."""
        document_probe = _result(
            Metadata(url="https://lms.example.com/lesson-1", course="Security 101"),
            ["Welcome to the course", "Passwords matter"],
            ["Require MFA", "Rotate keys"],
        )
        frame_probe = _result(
            Metadata(course="Security Basics", lesson="Lesson 1"),
            ["Passwords matter", "Phishing costs money"],
            ["Rotate keys", "Audit logs"],
        )

        document = AggregationPipeline().run([document_probe, None, frame_probe], scraped_at="2025-01-31T09:15:00.000Z")

        assert document.metadata.scraped_at == "2025-01-31T09:15:00.000Z"
        assert document.metadata.course == "Security 101"
        assert document.metadata.lesson == "Lesson 1"
        assert [block.content for block in document.content.text_blocks] == [
            "Welcome to the course",
            "Passwords matter",
            "Phishing costs money",
        ]
        assert [point.title for point in document.content.hotspots[0].points] == [
            "Require MFA",
            "Rotate keys",
            "Audit logs",
        ]
        assert document.statistics.text_blocks == 3
        assert document.statistics.hotspots == 1
        assert document.statistics.total_items == 4

    def test_no_contributions_yield_empty_document(self):
        """Test that all-failed sources produce the nothing-found document."""
        failed = ExtractionResult(success=False)

        document = AggregationPipeline().run([None, failed])

        assert document.is_empty
        assert document.statistics.total_items == 0
        assert document.metadata.scraped_at.endswith("Z")

    def test_each_run_starts_fresh(self):
        """Test that one run does not leak items into the next."""
        pipeline = AggregationPipeline()
        pipeline.run([_result(Metadata(course="First"), ["Welcome to the course"])])

        document = pipeline.run([_result(Metadata(course="Second"), ["Another lesson"])])

        assert document.metadata.course == "Second"
        assert [block.content for block in document.content.text_blocks] == ["Another lesson"]

    def test_card_without_shared_text_is_not_counted(self):
        """Test that a card with only a front and back is dropped before counting."""
        card = FlipCard(front="Phishing", back="A social attack")
        result = ExtractionResult(success=True, content=ContentCollection(flip_cards=[card]))

        document = AggregationPipeline().run([result])

        assert document.content.flip_cards == []
        assert document.statistics.flip_cards == 0
        assert document.statistics.total_items == 0
