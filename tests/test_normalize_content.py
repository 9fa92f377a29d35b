from __future__ import annotations

import logging

import pytest

from landing.utils.normalize_content import normalize_content


def test_single_key_wrapper_matching_parent_collapses():
    assert normalize_content({"title": {"title": "Welcome"}}) == {"title": "Welcome"}


def test_two_key_badge_record_is_preserved():
    content = {"badge": {"icon": "Leaf", "text": "Made Local"}}
    assert normalize_content(content) == content


def test_single_key_wrapper_with_other_key_collapses_to_value():
    assert normalize_content({"icon": {"value": "Leaf"}}) == {"icon": "Leaf"}


def test_root_record_never_collapses():
    assert normalize_content({"ctaLabel": "Buy"}) == {"ctaLabel": "Buy"}


def test_deep_wrappers_collapse_bottom_up():
    assert normalize_content({"a": {"b": {"c": "x"}}}) == {"a": "x"}


def test_lists_are_normalized_item_by_item():
    content = {"items": [{"items": "one"}, {"name": "two", "icon": "Star"}, 3, None]}
    assert normalize_content(content) == {"items": ["one", {"name": "two", "icon": "Star"}, 3, None]}


def test_single_key_with_non_primitive_value_is_kept():
    content = {"cta": {"link": {"label": "Go", "href": "#"}}}
    assert normalize_content(content) == content


@pytest.mark.parametrize("value", [None, "", "text", 0, 1.5, True, [], {}])
def test_primitives_and_empties_pass_through(value):
    assert normalize_content(value) == value


@pytest.mark.parametrize(
    "value",
    [
        {"title": {"title": "Welcome"}},
        {"a": {"b": {"c": "x"}}, "list": [{"k": {"v": 1}}]},
        {"badge": {"icon": {"value": "Leaf"}, "text": "Local"}},
        [{"x": {"y": "z"}}, {"p": 1, "q": 2}],
    ],
)
def test_normalize_is_idempotent(value):
    once = normalize_content(value)
    assert normalize_content(once) == once


def test_input_is_not_mutated():
    content = {"title": {"title": "Welcome"}}
    normalize_content(content)
    assert content == {"title": {"title": "Welcome"}}


def test_collapse_is_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="landing.utils.normalize_content"):
        normalize_content({"hero": {"title": {"value": "Hi"}}})
    assert any("hero.title" in rec.getMessage() for rec in caplog.records)
