"""Unit tests for quasar_docs.indexer."""

from __future__ import annotations

import httpx
import respx

from quasar_docs.fetcher import Fetcher
from quasar_docs.indexer import (
    build_index,
    extract_keywords,
    extract_title,
    humanize_slug,
    make_section,
)
from tests.conftest import FakeClock, mock_docs


class TestHelpers:
    def test_humanize_slug(self) -> None:
        assert humanize_slug("color-palette") == "Color Palette"
        assert humanize_slug("btn") == "Btn"

    def test_humanize_slug_keeps_inner_case(self) -> None:
        assert humanize_slug("vue-SSR") == "Vue SSR"

    def test_known_section(self) -> None:
        section = make_section("vue-components")
        assert section.title == "Vue Components"
        assert section.path == "vue-components"

    def test_unknown_section_synthesized(self) -> None:
        section = make_section("icon-genie")
        assert section.title == "Icon Genie"
        assert section.description == "Documentation for icon-genie"


class TestExtractTitle:
    def test_frontmatter_title(self) -> None:
        assert extract_title("---\ntitle: 'Button'\ndesc: x\n---\n# QBtn\n") == "Button"

    def test_first_heading(self) -> None:
        assert extract_title("Intro text\n# Dialog\n## API\n") == "Dialog"

    def test_nothing_found(self) -> None:
        assert extract_title("plain body") == ""


class TestExtractKeywords:
    def test_path_stem_and_alias(self) -> None:
        keywords = extract_keywords("", "vue-components/btn.md")
        assert keywords[:2] == ["vue-components", "btn"]
        assert "q-btn" in keywords

    def test_frontmatter_keywords(self) -> None:
        content = "---\nkeywords: [Button, 'Click', \"action\"]\n---\n"
        keywords = extract_keywords(content, "vue-components/btn.md")
        assert {"button", "click", "action"} <= set(keywords)

    def test_structural_terms(self) -> None:
        keywords = extract_keywords("See the Props and Events. API below.", "x/y.md")
        assert {"props", "events", "api"} <= set(keywords)
        assert "slots" not in keywords

    def test_deduplicated_in_first_seen_order(self) -> None:
        keywords = extract_keywords("api api", "vue-components/btn.md")
        assert len(keywords) == len(set(keywords))
        assert keywords.index("btn") < keywords.index("q-btn") < keywords.index("api")


class TestBuildLightweightIndex:
    async def test_pages_and_sections(self, fetcher: Fetcher, router: respx.Router) -> None:
        mock_docs(router)
        index = await build_index(fetcher, lightweight=True)

        assert [s.name for s in index.sections] == [
            "quasar-plugins",
            "start",
            "style",
            "vue-components",
        ]
        paths = [p.path for p in index.pages]
        assert paths == sorted(paths)
        assert len(paths) == 11

    async def test_page_metadata_from_filename(
        self, fetcher: Fetcher, router: respx.Router
    ) -> None:
        mock_docs(router)
        index = await build_index(fetcher, lightweight=True)
        btn = next(p for p in index.pages if p.path == "vue-components/btn.md")

        assert btn.title == "Btn"
        assert btn.section == "vue-components"
        assert btn.keywords == ("btn", "q-btn", "vue-components")
        assert btn.url == "https://quasar.dev/vue-components/btn"

    async def test_section_is_first_path_segment(
        self, fetcher: Fetcher, router: respx.Router
    ) -> None:
        mock_docs(router)
        index = await build_index(fetcher, lightweight=True)
        for page in index.pages:
            assert page.section == page.path.split("/")[0]

    async def test_no_content_fetched(self, fetcher: Fetcher, router: respx.Router) -> None:
        mock_docs(router)
        await build_index(fetcher, lightweight=True)
        assert not any("raw.githubusercontent.com" in str(c.request.url) for c in router.calls)

    async def test_build_date_from_clock(
        self, fetcher: Fetcher, router: respx.Router, clock: FakeClock
    ) -> None:
        mock_docs(router)
        index = await build_index(fetcher, clock=clock)
        assert index.build_date == clock.now

    async def test_deterministic(self, fetcher: Fetcher, router: respx.Router) -> None:
        mock_docs(router)
        first = await build_index(fetcher)
        second = await build_index(fetcher)
        assert first.pages == second.pages
        assert first.sections == second.sections

    async def test_empty_when_remote_unreachable(
        self, fetcher: Fetcher, router: respx.Router
    ) -> None:
        router.get(url__startswith="https://api.github.com").mock(
            side_effect=httpx.ConnectError("down")
        )
        index = await build_index(fetcher)
        assert index.pages == ()
        assert index.sections == ()


class TestBuildFullIndex:
    async def test_titles_from_content(self, fetcher: Fetcher, router: respx.Router) -> None:
        mock_docs(router)
        index = await build_index(fetcher, lightweight=False)
        titles = {p.path: p.title for p in index.pages}

        assert titles["vue-components/btn.md"] == "Button"  # frontmatter
        assert titles["vue-components/dialog.md"] == "Dialog"  # first heading
        assert titles["style/color-palette.md"] == "Color Palette"

    async def test_keywords_from_content(self, fetcher: Fetcher, router: respx.Router) -> None:
        mock_docs(router)
        index = await build_index(fetcher, lightweight=False)
        btn = next(p for p in index.pages if p.path == "vue-components/btn.md")

        assert {"btn", "q-btn", "button", "click", "action", "api", "props", "events"} <= set(
            btn.keywords
        )

    async def test_fetch_failure_degrades_page(
        self, fetcher: Fetcher, router: respx.Router
    ) -> None:
        content = {"style/typography.md": "# Typography\n"}
        tree = {"": [("style", "dir")], "style": [("typography.md", "file"), ("gone.md", "file")]}
        mock_docs(router, tree=tree, content=content)

        index = await build_index(fetcher, lightweight=False)
        gone = next(p for p in index.pages if p.path == "style/gone.md")

        assert len(index.pages) == 2
        assert gone.title == "gone"
        assert gone.keywords == ()
