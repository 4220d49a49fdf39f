from pathlib import Path

import pytest

from note_frontmatter import Frontmatter, split_frontmatter
from site_errors import FrontmatterError


SOURCE = Path("vault/notes/a.md")


def test_no_frontmatter_returns_none_and_original_text() -> None:
    text = "# Heading\n\nBody [[b]]\n"
    fm, body = split_frontmatter(text, SOURCE)
    assert fm is None
    assert body == text


def test_title_date_and_tags() -> None:
    text = "---\ntitle: Alpha\ndate: '2024-01-05'\ntags: [intro, draft]\n---\n[[b]]\n"
    fm, body = split_frontmatter(text, SOURCE)
    assert fm == Frontmatter(title="Alpha", date="2024-01-05", tags=["intro", "draft"])
    assert body.strip() == "[[b]]"


def test_unquoted_date_kept_as_text() -> None:
    fm, _ = split_frontmatter("---\ndate: 2024-01-05\n---\nBody\n", SOURCE)
    assert fm.date == "2024-01-05"


@pytest.mark.parametrize(
    "written",
    ["2024-01-05 10:30:00", "2024-01-05T10:30:00Z", "2024-01-05T10:30:00.5+02:00"],
)
def test_datetimes_kept_as_written(written: str) -> None:
    fm, _ = split_frontmatter(f"---\ndate: {written}\n---\nBody\n", SOURCE)
    assert fm.date == written


def test_title_that_looks_like_a_date_stays_text() -> None:
    fm, _ = split_frontmatter("---\ntitle: 2024-01-05\n---\nBody\n", SOURCE)
    assert fm.title == "2024-01-05"


@pytest.mark.parametrize(
    "text",
    [
        "{\nnot json at all\n}\nBody\n",
        '+++\ntitle = "toml"\n+++\nBody\n',
    ],
)
def test_only_yaml_blocks_count_as_frontmatter(text: str) -> None:
    fm, body = split_frontmatter(text, SOURCE)
    assert fm is None
    assert body == text


def test_missing_keys_are_none() -> None:
    fm, body = split_frontmatter("---\nauthor: someone\n---\nBody\n", SOURCE)
    assert fm == Frontmatter()
    assert body.strip() == "Body"


def test_empty_block_yields_empty_frontmatter() -> None:
    fm, body = split_frontmatter("---\n---\nBody\n", SOURCE)
    assert fm == Frontmatter()
    assert body.strip() == "Body"


def test_unclosed_block_is_plain_markdown() -> None:
    text = "---\ntitle: x\nno closing line\n"
    fm, body = split_frontmatter(text, SOURCE)
    assert fm is None
    assert body == text


def test_yaml_error_names_the_file() -> None:
    with pytest.raises(FrontmatterError) as exc_info:
        split_frontmatter("---\ntitle: [oops\n---\nBody\n", SOURCE)
    assert str(SOURCE) in str(exc_info.value)
    assert exc_info.value.path == SOURCE


@pytest.mark.parametrize(
    "block",
    [
        "- just\n- a list\n",
        "title: 42\n",
        "tags: single\n",
        "tags: [ok, 3]\n",
    ],
)
def test_wrong_shape_is_rejected(block: str) -> None:
    with pytest.raises(FrontmatterError):
        split_frontmatter(f"---\n{block}---\nBody\n", SOURCE)
