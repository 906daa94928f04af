# ABOUTME: Tests for item fingerprints used by the deduplicator
# ABOUTME: Validates field priority, hotspot keys, keyless variants and the 200-character truncation

from course_scraper.core.fingerprint import FINGERPRINT_LENGTH, fingerprint, is_usable
from course_scraper.core.models import (
    FlipCard,
    Hotspot,
    HotspotPoint,
    Image,
    KnowledgeCheck,
    ListBlock,
    Table,
    TextBlock,
)


class TestPrimaryText:
    """Test fingerprints for items with shared text fields."""

    def test_content_wins_over_other_fields(self):
        """Test the content > question > title > description > label priority."""
        item = TextBlock.model_validate({"content": "Body text", "title": "Heading", "label": "Label"})

        assert fingerprint(item) == "Body text"

    def test_question_used_for_knowledge_checks(self):
        """Test that knowledge checks are keyed on their question."""
        check = KnowledgeCheck(question="Which factor is strongest?")

        assert fingerprint(check) == "Which factor is strongest?"

    def test_falls_through_empty_fields(self):
        """Test that empty fields are skipped in priority order."""
        item = TextBlock.model_validate({"content": "", "description": "Only a description"})

        assert fingerprint(item) == "Only a description"

    def test_truncated_to_window(self):
        """Test that long texts are cut to the fingerprint window."""
        item = TextBlock(content="x" * 250)

        assert len(fingerprint(item)) == FINGERPRINT_LENGTH == 200


class TestHotspotFingerprint:
    """Test hotspot group fingerprints."""

    def test_joins_point_texts(self):
        """Test that point titles (or descriptions) are joined with a pipe."""
        hotspot = Hotspot(
            points=[
                HotspotPoint(title="Require MFA"),
                HotspotPoint(description="Only a description"),
                HotspotPoint(),
            ]
        )

        assert fingerprint(hotspot) == "Require MFA|Only a description"

    def test_empty_group_has_no_fingerprint(self):
        """Test that a group without text is unusable."""
        assert fingerprint(Hotspot()) == ""


class TestItemsWithoutSharedText:
    """Test fingerprints for variants that carry no shared text field."""

    def test_flip_card_front_and_back_are_not_keys(self):
        """Test that a card with only a front and back has an empty key."""
        assert fingerprint(FlipCard(front="Phishing", back="A social attack")) == ""

    def test_extra_title_is_used(self):
        """Test that a title kept from the payload keys the item."""
        card = FlipCard.model_validate({"title": "Phishing basics", "front": "Phishing", "back": "A social attack"})

        assert fingerprint(card) == "Phishing basics"

    def test_lists_tables_and_images_have_no_key(self):
        """Test that items, cells and sources are never used as keys."""
        assert fingerprint(ListBlock(items=["One", "Two"])) == ""
        assert fingerprint(ListBlock(items=[""] * 6)) == ""
        assert fingerprint(Table(headers=["Name", "Role"], rows=[["Ada", "Admin"]])) == ""
        assert fingerprint(Image(src="https://cdn.example.com/a.png", alt="Diagram")) == ""

    def test_extra_description_keys_an_image(self):
        """Test that a shared field on an image is used even when a source exists."""
        image = Image.model_validate({"src": "https://cdn.example.com/a.png", "description": "Attack surface"})

        assert fingerprint(image) == "Attack surface"


class TestIsUsable:
    """Test the minimum fingerprint length."""

    def test_short_keys_are_unusable(self):
        """Test that keys under five characters identify nothing."""
        assert not is_usable("")
        assert not is_usable("Next")
        assert is_usable("Hello")
