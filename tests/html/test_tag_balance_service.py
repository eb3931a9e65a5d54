# tests/html/test_tag_balance_service.py
from collections import Counter

import pytest

from datatypes.model import VOID_ELEMENTS
from datatypes.services.tag_balance_service import TagBalanceService
from datatypes.services.tag_scan_service import TagScanService


def _close(html: str) -> str:
    return TagBalanceService.close_unbalanced(html, TagScanService.split(html).tags)


def test_closes_in_reverse_order_of_first_appearance():
    assert _close("<b><i>text") == "<b><i>text</i></b>"


def test_only_owed_tags_are_closed():
    assert _close("<b><i>text</i>") == "<b><i>text</i></b>"
    assert _close("<b>text</b>") == "<b>text</b>"


def test_void_elements_are_never_closed():
    html = '<p>a<br><img src="x.png"><hr/>'
    assert TagBalanceService.closing_tags(TagScanService.split(html).tags) == ["</p>"]


def test_repeated_opens_owe_one_close_each():
    assert _close("<p>a<p>b") == "<p>a<p>b</p></p>"


def test_more_closes_than_opens_owes_nothing():
    assert _close("a</b></b><b>") == "a</b></b><b>"


def test_names_compare_case_insensitively():
    assert _close("<B>x</b>") == "<B>x</b>"
    assert _close("<B>x") == "<B>x</B>"


def test_interleaved_tags_are_balanced_by_counts_only():
    # Aggregate counting: <b> is considered closed even though </b> came too early.
    assert _close("<b><i>x</b>") == "<b><i>x</b></i>"


@pytest.mark.parametrize("html", [
    "<div><p>One<p>Two<ul><li>a<li>b",
    "<b><i><u>deep",
    "<P>Upper<br>case",
    "no tags at all",
    "</span>stray close<span>open",
])
def test_every_non_void_tag_is_balanced_afterwards(html):
    opened, closed = Counter(), Counter()
    for tag in TagScanService.split(_close(html)).tags:
        name = tag.name.lower()
        if name in VOID_ELEMENTS:
            continue
        (closed if tag.is_closing else opened)[name] += 1
    for name, count in opened.items():
        assert closed[name] >= count
