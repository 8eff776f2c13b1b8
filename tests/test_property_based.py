from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st
from toc_engine import TocSettings, generate
from toc_engine.hierarchy import filter_by_depth, flatten_headings
from toc_engine.models import Heading, TocFormat
from toc_engine.slugify import generate_anchor

title_strategy = st.text(
    alphabet=string.ascii_letters + string.digits + " _-!?.",
    min_size=1,
    max_size=24,
).filter(lambda title: title.strip())

document_strategy = st.lists(
    st.one_of(
        st.tuples(st.integers(min_value=1, max_value=6), title_strategy).map(
            lambda item: f"{'#' * item[0]} {item[1]}"
        ),
        st.text(alphabet=string.ascii_letters + " #`", max_size=30),
    ),
    max_size=25,
).map("\n".join)

depth_window = st.tuples(
    st.integers(min_value=1, max_value=6), st.integers(min_value=1, max_value=6)
).map(sorted)

settings_strategy = st.builds(
    TocSettings,
    format=st.sampled_from([member.value for member in TocFormat]),
    include_links=st.booleans(),
    bullet_style=st.sampled_from(["dash", "asterisk", "plus", "number", "custom"]),
    indent_style=st.sampled_from(["spaces", "tabs", "none"]),
    case_style=st.sampled_from(["original", "lowercase", "uppercase", "title", "sentence"]),
    remove_numbers=st.booleans(),
    remove_special_chars=st.booleans(),
)


def _check_levels(headings: list[Heading], parent_level: int = 0) -> None:
    for heading in headings:
        assert heading.level > parent_level
        _check_levels(heading.children, heading.level)


@given(document_strategy, settings_strategy)
def test_generate_is_deterministic(document: str, settings: TocSettings):
    first = generate(document, settings)
    second = generate(document, settings)

    assert first.toc == second.toc
    assert first.headings == second.headings
    assert first.statistics == second.statistics


@given(st.text(), st.integers(min_value=1, max_value=6), st.integers(min_value=1, max_value=6))
def test_anchor_depends_only_on_text(text: str, first_level: int, second_level: int):
    first = generate(f"{'#' * first_level} {text}")
    second = generate(f"para\n\n{'#' * second_level} {text}")

    assert [heading.anchor for heading in flatten_headings(first.headings)] == [
        heading.anchor for heading in flatten_headings(second.headings)
    ]


@given(st.text())
def test_generate_anchor_is_url_fragment_safe(text: str):
    anchor = generate_anchor(text)

    assert anchor == anchor.strip("-")
    assert "--" not in anchor
    assert all(character in string.ascii_lowercase + string.digits + "_-" for character in anchor)


@given(document_strategy)
def test_children_are_deeper_than_parents(document: str):
    _check_levels(generate(document).headings)


@given(document_strategy, depth_window)
def test_depth_filter_only_keeps_window_levels(document: str, window: list[int]):
    min_depth, max_depth = window
    result = generate(document, TocSettings(min_depth=min_depth, max_depth=max_depth))

    filtered = filter_by_depth(result.headings, min_depth, max_depth)
    levels = {heading.level for heading in flatten_headings(filtered)}
    in_window = [
        heading
        for heading in flatten_headings(result.headings)
        if min_depth <= heading.level <= max_depth
    ]

    assert levels <= set(range(min_depth, max_depth + 1))
    assert len(flatten_headings(filtered)) == len(in_window)
    _check_levels(filtered)


@given(document_strategy, depth_window)
def test_statistics_do_not_depend_on_depth_window(document: str, window: list[int]):
    min_depth, max_depth = window

    narrow = generate(document, TocSettings(min_depth=min_depth, max_depth=max_depth))
    wide = generate(document)

    assert narrow.statistics == wide.statistics


@given(settings_strategy, depth_window)
def test_empty_document_yields_empty_toc(settings: TocSettings, window: list[int]):
    settings.min_depth, settings.max_depth = window

    result = generate("", settings)

    assert result.toc == ""
    assert result.statistics.total_headings == 0
