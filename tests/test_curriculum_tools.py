"""Tests for the curriculum browsing tools."""

import pytest

from errors.exceptions import GoogleDocFetchError


@pytest.mark.asyncio
async def test_list_files_all(registry):
    result = await registry.execute("list_files", {})
    assert result["count"] == 4
    first = result["files"][0]
    assert first["id"] == "resource-1"
    assert first["lesson"] == "Introduction to Binti and Cultural Identity"
    assert first["course"] == "English I - Foundations of Literature"
    assert "Guided Practice" in first["headings"]


@pytest.mark.asyncio
async def test_list_files_filters(registry):
    result = await registry.execute("list_files", {"lessonId": "lesson-1", "fileType": "teacher_guide"})
    assert [f["id"] for f in result["files"]] == ["resource-1"]

    empty = await registry.execute("list_files", {"lessonId": "lesson-3"})
    assert empty == {"files": [], "count": 0}


@pytest.mark.asyncio
async def test_search_excerpts_capped_at_three(registry):
    result = await registry.execute("search_files", {"query": "binti"})
    assert result["query"] == "binti"
    assert result["count"] == len(result["results"]) > 0
    for hit in result["results"]:
        assert len(hit["excerpts"]) <= 3
        for excerpt in hit["excerpts"]:
            assert excerpt.startswith("...") and excerpt.endswith("...")
            assert len(excerpt) <= 150 + 6
            assert "binti" in excerpt.lower()


@pytest.mark.asyncio
async def test_search_with_type_filter(registry):
    result = await registry.execute("search_files", {"query": "binti", "fileType": "assessment"})
    assert {hit["type"] for hit in result["results"]} == {"assessment"}


@pytest.mark.asyncio
async def test_open_file_returns_embed_artifact(registry):
    result = await registry.execute("open_file", {"fileId": "resource-1"})
    assert result["title"] == "Lesson 1 Teacher Guide"
    assert result["content"].startswith("# Lesson 1")
    artifact = result["artifact"]
    assert artifact["id"] == "resource-resource-1"
    assert artifact["type"] == "lesson_plan"
    assert artifact["title"] == "Lesson 1 Teacher Guide"
    assert artifact["content"] == ""
    assert artifact["embedUrl"].endswith("/preview")
    assert artifact["externalUrl"].startswith("https://docs.google.com/document/d/")
    assert artifact["metadata"]["sourceFileId"] == "resource-1"


@pytest.mark.asyncio
async def test_open_file_section(registry):
    result = await registry.execute("open_file", {"fileId": "resource-1", "section": "Warm-Up"})
    assert result["content"].startswith("## Warm-Up Activity")
    assert "## Mini-Lesson" not in result["content"]


@pytest.mark.asyncio
async def test_open_file_unknown_id(registry):
    result = await registry.execute("open_file", {"fileId": "resource-99"})
    assert result == {"error": "File not found", "fileId": "resource-99"}


@pytest.mark.asyncio
async def test_copy_section_verbatim(registry):
    result = await registry.execute(
        "copy_section", {"fileId": "resource-1", "heading": "Learning Objectives"}
    )
    assert result["fileId"] == "resource-1"
    assert result["content"].startswith("## Learning Objectives")
    assert "science fiction" in result["content"]
    assert "## Materials Needed" not in result["content"]
    assert result["note"]


@pytest.mark.asyncio
async def test_copy_section_missing_heading(registry):
    result = await registry.execute(
        "copy_section", {"fileId": "resource-2", "heading": "Vocabulary Bank"}
    )
    assert result["error"] == "Section not found"
    assert result["heading"] == "Vocabulary Bank"
    assert "Goals" in result["availableHeadings"]


@pytest.mark.asyncio
async def test_copy_section_from_subsection_runs_to_next_top_level_heading(registry):
    result = await registry.execute(
        "copy_section", {"fileId": "resource-1", "heading": "Introduction to Science Fiction"}
    )
    content = result["content"]
    assert content.startswith("### Introduction to Science Fiction")
    assert "### Author Background" in content
    assert "### Cultural Context: The Himba People" in content
    assert "## Guided Practice" not in content


@pytest.mark.asyncio
async def test_open_file_subsection_keeps_sibling_subsections(registry):
    result = await registry.execute(
        "open_file", {"fileId": "resource-1", "section": "Author Background"}
    )
    assert result["content"].startswith("### Author Background")
    assert "### Cultural Context" in result["content"]
    assert "## Guided Practice" not in result["content"]


@pytest.mark.asyncio
async def test_fetch_google_doc(registry, google_docs):
    result = await registry.execute("fetch_google_doc", {"fileId": "resource-1"})
    google_docs.fetch.assert_awaited_once()
    assert result["title"] == "Lesson 1 Teacher Guide (live)"
    assert "# Learning Objectives" in result["markdown"]
    assert "**Binti**" in result["markdown"]
    assert result["artifact"]["content"] == result["markdown"]
    assert result["artifact"]["metadata"]["googleDocTitle"] == "Lesson 1 Teacher Guide (live)"


@pytest.mark.asyncio
async def test_fetch_google_doc_failure_is_reported(registry, google_docs):
    google_docs.fetch.side_effect = GoogleDocFetchError(
        "Failed to fetch document: Not Found", status_code=404
    )
    result = await registry.execute("fetch_google_doc", {"fileId": "resource-1"})
    assert result == {"error": "Fetch failed", "message": "Failed to fetch document: Not Found"}


@pytest.mark.asyncio
async def test_fetch_google_doc_unknown_file(registry, google_docs):
    result = await registry.execute("fetch_google_doc", {"fileId": "resource-99"})
    assert result["error"] == "File not found"
    google_docs.fetch.assert_not_awaited()
