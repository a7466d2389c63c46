"""Unit tests for component-name and page-path resolution."""

from __future__ import annotations

import pytest

from quasar_docs.components import (
    component_name_variants,
    component_paths,
    index_page_path,
    normalize_component_name,
    normalize_page_path,
)


class TestNormalizeComponentName:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("btn", "btn"),
            ("q-btn", "btn"),
            ("Q-Btn", "btn"),
            ("button", "btn"),
            ("modal", "dialog"),
            ("dropdown", "select"),
            ("q-datepicker", "date"),
            ("accordion", "expansion-item"),
            ("toast", "notify"),
        ],
    )
    def test_resolution(self, raw: str, expected: str) -> None:
        assert normalize_component_name(raw) == expected

    def test_unknown_name_passes_through(self) -> None:
        assert normalize_component_name("Knob-Thing") == "knob-thing"

    def test_prefix_only_stripped_at_start(self) -> None:
        assert normalize_component_name("btn-q-x") == "btn-q-x"


class TestComponentPaths:
    def test_direct_path_first(self) -> None:
        assert component_paths("btn")[0] == "vue-components/btn.md"

    def test_hyphen_removal_variant(self) -> None:
        assert component_paths("btn-group") == [
            "vue-components/btn-group.md",
            "vue-components/btngroup.md",
        ]

    def test_no_duplicate_lookups(self) -> None:
        paths = component_paths("dialog")
        assert paths == ["vue-components/dialog.md"]

    def test_camel_case_variant(self) -> None:
        assert "scrollArea" in component_name_variants("scrollArea")
        assert "scroll-area" in component_name_variants("scrollArea")

    def test_custom_section(self) -> None:
        assert component_paths("btn", "components") == ["components/btn.md"]


class TestNormalizePagePath:
    def test_adds_extension(self) -> None:
        assert normalize_page_path("style/color-palette") == "style/color-palette.md"

    def test_strips_slashes(self) -> None:
        assert normalize_page_path("/quasar-plugins/notify/") == "quasar-plugins/notify.md"

    def test_keeps_existing_extension(self) -> None:
        assert normalize_page_path("vue-components/btn.md") == "vue-components/btn.md"

    def test_index_fallback(self) -> None:
        assert index_page_path("start/upgrade-guide.md") == "start/upgrade-guide/index.md"
