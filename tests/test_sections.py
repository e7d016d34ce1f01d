"""Tests for heading-based section slicing."""

from services.sections import extract_section, find_section, heading_level

DOC = "# Title\n\n## A\nalpha line\n### A.1\nnested\n## B\nbeta line\n"


def test_heading_level():
    assert heading_level("# Title") == 1
    assert heading_level("### A.1") == 3
    assert heading_level("#hashtag") == 0
    assert heading_level("plain text") == 0


def test_section_stops_at_next_same_level_heading():
    assert extract_section(DOC, "A") == "## A\nalpha line\n### A.1\nnested"


def test_section_boundary_between_siblings():
    doc = "## A\nx\n## B\ny"
    assert extract_section(doc, "## A") == "## A\nx"
    assert extract_section(doc, "## B") == "## B\ny"


def test_section_keeps_deeper_headings():
    lines = DOC.split("\n")
    section = find_section(lines, "## A")
    assert section.level == 2
    assert section.text == "## A\nalpha line\n### A.1\nnested"


def test_section_runs_to_end_of_document():
    section = find_section(DOC.split("\n"), "## B")
    assert section.end == len(DOC.split("\n"))
    assert section.text.startswith("## B\nbeta line")


def test_match_is_case_insensitive_substring():
    assert extract_section("## Warm-Up Activity (10 minutes)\nwrite\n## Next", "warm-up") == (
        "## Warm-Up Activity (10 minutes)\nwrite"
    )


def test_non_heading_match_counts_as_level_two():
    doc = "## Part\n**Exit Ticket**: answer\nmore\n### Detail\nd\n## After"
    section = find_section(doc.split("\n"), "exit ticket")
    assert section.level == 2
    assert section.text == "**Exit Ticket**: answer\nmore\n### Detail\nd"


def test_missing_heading_returns_none():
    assert extract_section(DOC, "Conclusion") is None
    assert extract_section(DOC, "   ") is None


def test_first_match_wins(content_store):
    guide = content_store.get_resource("resource-1").content
    text = extract_section(guide, "Guided Practice")
    assert text.startswith("## Guided Practice (20 minutes)")
    assert "## Independent Practice" not in text
    assert "### Shared Reading" in text


def test_subsection_runs_to_next_top_level_heading():
    doc = "## A\n### A.1\none\n### A.2\ntwo\n#### A.2.a\nthree\n## B\nb"
    section = find_section(doc.split("\n"), "A.1")
    assert section.text == "### A.1\none\n### A.2\ntwo\n#### A.2.a\nthree"


def test_level_one_section_ignores_level_two_headings():
    doc = "# Part One\n## A\na\n# Part Two\nb"
    assert extract_section(doc, "Part One") == "# Part One\n## A\na"
