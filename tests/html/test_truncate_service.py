# tests/html/test_truncate_service.py
import pytest

from datatypes.managers.config_manager import config_manager
from datatypes.services.tag_scan_service import TagScanService
from datatypes.services.truncate_service import TruncateService
from datatypes.utils.entities import unescape


@pytest.fixture
def service():
    return TruncateService(indicator="...")


@pytest.mark.parametrize("html, length, expected", [
    ("Test One Two Three", 20, "Test One Two Three"),
    ("Test One Two Three", 8, "Test One..."),
    ("<b>Test One Two Three</b>", 8, "<b>Test One...</b>"),
    ('<b><img src="test"/>Test One Two Three</b>', 8, '<b><img src="test"/>Test One...</b>'),
    (
        '<b><img src="test"/><a href="test.php">Test One Two</a> Three</b>',
        8,
        '<b><img src="test"/><a href="test.php">Test One...</a></b>',
    ),
    (
        '<b><img src="test"/><a href="test.php">Test One Two</a> Three</b>',
        20,
        '<b><img src="test"/><a href="test.php">Test One Two</a> Three</b>',
    ),
])
def test_truncate(service, html, length, expected):
    assert service.truncate(html, length) == expected


def test_length_may_be_a_numeric_string(service):
    assert service.truncate("Test One Two Three", "8") == "Test One..."


def test_without_closing_unclosed_tags(service):
    assert service.truncate("<b>Test One Two Three</b>", 8, close_unclosed=False) == "<b>Test One..."


def test_text_before_the_first_tag_is_kept(service):
    assert service.truncate("Intro <b>bold text here</b>", 8) == "Intro <b>bo...</b>"


@pytest.mark.parametrize("length", [0, -5])
def test_non_positive_length_keeps_nothing(service, length):
    assert service.truncate("<b>Hello</b>", length) == "..."
    assert service.truncate("Hello", length) == "..."


def test_entities_count_as_one_character(service):
    assert service.truncate("<b>Fish &amp; Chips</b>", 6) == "<b>Fish &amp;...</b>"


def test_entity_text_that_fits_once_decoded_is_unchanged(service):
    html = "<b>&amp;&amp;&amp;</b>"
    assert service.truncate(html, 5) == html


def test_bytes_input_is_decoded(service):
    html = "<p>Crème brûlée</p>".encode("utf-8")
    assert service.truncate(html, 5) == "<p>Crème...</p>"


def test_indicator_comes_from_configuration():
    config_manager.set_nested("html.truncation_indicator", " [more]")
    assert TruncateService().truncate("Test One Two Three", 4) == "Test [more]"


@pytest.mark.parametrize("html", [
    "<p>Hello <b>World</b>, this is <i>a longer</i> sentence.</p>",
    "No markup here but long enough to cut",
    "<ul><li>One &amp; two</li><li>Three</li></ul>",
])
@pytest.mark.parametrize("length", [0, 3, 10, 25])
def test_visible_length_is_bounded(service, html, length):
    truncated = service.truncate(html, length)
    visible = "".join(unescape(text) for text in TagScanService.split(truncated).texts)
    assert len(visible) <= length + len("...")
