# ABOUTME: Tests for normalizing raw probe payloads into extraction results
# ABOUTME: Validates envelope handling, bare metadata, per-item validation and hotspot point capture

import pytest

from course_scraper.core.models import ContentCollection, ExtractionResult, HotspotPoint, Metadata
from course_scraper.extraction.capture import PayloadCapture
from course_scraper.extraction.filters import LabelFilter


@pytest.fixture
def capture() -> PayloadCapture:
    return PayloadCapture()


class TestEnvelope:
    """Test the accepted payload shapes."""

    def test_successful_envelope(self, capture):
        """Test a full document-probe payload."""
        payload = {
            "success": True,
            "data": {
                "metadata": {"url": "https://lms.example.com/lesson-1", "course": "Security 101"},
                "content": {
                    "textBlocks": [{"content": "Welcome to the course"}],
                    "flipCards": [{"front": "Phishing", "back": "A social attack"}],
                    "rawText": "Welcome to the course",
                },
            },
        }

        result = capture.capture(payload)

        assert isinstance(result, ExtractionResult)
        assert result.success
        assert result.metadata.course == "Security 101"
        assert result.content.text_blocks[0].content == "Welcome to the course"
        assert result.content.flip_cards[0].front == "Phishing"
        assert result.content.raw_text == "Welcome to the course"

    def test_failed_envelope(self, capture):
        """Test that unsuccessful results contribute nothing."""
        assert capture.capture({"success": False, "error": "frame not found"}) is None

    @pytest.mark.parametrize("payload", [None, "text", 42, ["a", "b"], {}])
    def test_junk_payloads(self, capture, payload):
        """Test that anything unrecognised yields None."""
        assert capture.capture(payload) is None

    def test_bare_metadata(self, capture):
        """Test that an envelope-free object with a URL is bare metadata."""
        result = capture.capture({"url": "https://lms.example.com/lesson-1", "lesson": "Lesson 1"})

        assert isinstance(result, Metadata)
        assert result.url == "https://lms.example.com/lesson-1"
        assert result.lesson == "Lesson 1"

    def test_nested_content_metadata_is_lifted(self, capture):
        """Test that metadata inside the content block fills the gaps of data.metadata."""
        payload = {
            "success": True,
            "data": {
                "metadata": {"course": "Security 101"},
                "content": {"metadata": {"course": "Ignored", "lesson": "Lesson 1"}},
            },
        }

        result = capture.capture(payload)

        assert result.metadata.course == "Security 101"
        assert result.metadata.lesson == "Lesson 1"

    def test_unknown_content_keys_ignored(self, capture):
        """Test that categories outside the closed set are dropped."""
        payload = {"success": True, "data": {"content": {"carousels": [{"content": "Slide"}], "lists": "bad"}}}

        result = capture.capture(payload)

        assert result.content == ContentCollection()


class TestItems:
    """Test per-item capture."""

    def test_malformed_item_dropped_alone(self, capture):
        """Test that one invalid item does not cost the rest of the payload."""
        payload = {
            "success": True,
            "data": {
                "content": {
                    "textBlocks": [{"content": "Welcome to the course"}, "not an object", {"content": "Goodbye"}],
                }
            },
        }

        result = capture.capture(payload)

        assert [block.content for block in result.content.text_blocks] == ["Welcome to the course", "Goodbye"]

    def test_system_message_questions_dropped(self, capture):
        """Test that player system messages are not captured as questions."""
        payload = {
            "success": True,
            "data": {
                "content": {
                    "knowledgeChecks": [
                        {"question": "You are offline. Trying to reconnect..."},
                        {"question": "Which factor is strongest?", "choices": ["Password", "Hardware key"]},
                    ]
                }
            },
        }

        result = capture.capture(payload)

        assert [check.question for check in result.content.knowledge_checks] == ["Which factor is strongest?"]


class TestHotspotPoints:
    """Test hotspot point capture from raw labels."""

    def test_point_segmented_from_raw_label(self, capture):
        """Test that a point with only a raw label gets a title and description."""
        point = capture.capture_point(HotspotPoint(raw_label="Status: Active"))

        assert point.title == "Status"
        assert point.description == "Active"
        assert point.raw_label == "Status: Active"

    def test_point_with_label_extra(self, capture):
        """Test that a plain label field is used when rawLabel is absent."""
        point = capture.capture_point(HotspotPoint.model_validate({"label": "Status: Active"}))

        assert point.title == "Status"

    def test_point_with_title_untouched(self, capture):
        """Test that points that already have text are kept as-is."""
        point = HotspotPoint(title="Require MFA", description="Always on", raw_label="Close Modal")

        assert capture.capture_point(point) is point

    def test_ui_chrome_point_dropped(self, capture):
        """Test that excluded labels yield no point."""
        assert capture.capture_point(HotspotPoint(raw_label="Close Modal")) is None

    def test_hotspot_reindexed_after_exclusions(self, capture):
        """Test that surviving points are numbered contiguously."""
        payload = {
            "success": True,
            "data": {
                "content": {
                    "hotspots": [
                        {
                            "points": [
                                {"index": 0, "rawLabel": "Next"},
                                {"index": 1, "rawLabel": "Status: Active"},
                                {"index": 2, "rawLabel": "Require MFAThe first time a user logs in, they must set up MFA."},
                            ]
                        },
                        {"points": [{"rawLabel": "Close Modal"}]},
                    ]
                }
            },
        }

        result = capture.capture(payload)

        assert len(result.content.hotspots) == 1
        points = result.content.hotspots[0].points
        assert [point.index for point in points] == [0, 1]
        assert [point.title for point in points] == ["Status", "Require MFA"]

    def test_capture_hotspot_group(self, capture):
        """Test building a group from a graphic's marker names."""
        group = capture.capture_hotspot_group(["Account Settings", None, "Next", "Status: Active"], group_id="hs-1")

        assert group.text_field("id") == "hs-1"
        assert [point.title for point in group.points] == ["Account", "Status"]
        assert [point.index for point in group.points] == [0, 1]

    def test_injected_label_filter(self):
        """Test that the capture layer uses the injected exclusion vocabulary."""
        capture = PayloadCapture(label_filter=LabelFilter(["status"]))

        assert capture.capture_hotspot_group(["Status: Active"]) is None
