"""Resolution of user-supplied component names and page paths to doc file paths."""

from __future__ import annotations

import re

from quasar_docs.fetcher import MARKDOWN_EXT

# Common names people use for Quasar components -> docs file stem
COMPONENT_ALIASES: dict[str, str] = {
    "button": "btn",
    "textfield": "input",
    "text": "input",
    "dropdown": "select",
    "checkbox": "checkbox",
    "radio": "radio",
    "toggle": "toggle",
    "slider": "slider",
    "range": "range",
    "datepicker": "date",
    "timepicker": "time",
    "colorpicker": "color-picker",
    "modal": "dialog",
    "popup": "dialog",
    "notification": "notify",
    "toast": "notify",
    "snackbar": "notify",
    "loading": "loading-bar",
    "spinner": "spinner",
    "progress": "linear-progress",
    "progressbar": "linear-progress",
    "tabs": "tabs",
    "tab": "tabs",
    "table": "table",
    "datatable": "table",
    "list": "list",
    "item": "item",
    "card": "card",
    "chip": "chip",
    "badge": "badge",
    "avatar": "avatar",
    "icon": "icon",
    "img": "img",
    "image": "img",
    "video": "video",
    "carousel": "carousel",
    "pagination": "pagination",
    "stepper": "stepper",
    "timeline": "timeline",
    "tree": "tree",
    "expansion": "expansion-item",
    "accordion": "expansion-item",
    "menu": "menu",
    "toolbar": "toolbar",
    "header": "header",
    "footer": "footer",
    "drawer": "drawer",
    "sidebar": "drawer",
    "fab": "fab",
    "tooltip": "tooltip",
    "scroll": "scroll-area",
    "scrollarea": "scroll-area",
    "splitter": "splitter",
    "separator": "separator",
    "space": "space",
    "resize": "resize-observer",
    "intersection": "intersection",
    "uploader": "uploader",
    "upload": "uploader",
    "file": "file",
    "editor": "editor",
    "knob": "knob",
    "rating": "rating",
    "field": "field",
    "form": "form",
    "optiongroup": "option-group",
    "btngroup": "btn-group",
    "btntoggle": "btn-toggle",
    "btndropdown": "btn-dropdown",
    "bar": "bar",
    "breadcrumbs": "breadcrumbs",
    "banner": "banner",
    "markup": "markup-table",
    "nossr": "no-ssr",
    "parallax": "parallax",
    "pulltorefresh": "pull-to-refresh",
    "skeleton": "skeleton",
    "slide": "slide-item",
    "virtualscroll": "virtual-scroll",
    "infinitescroll": "infinite-scroll",
}


def normalize_component_name(name: str) -> str:
    """``Q-Btn`` -> ``btn``, ``button`` -> ``btn``."""
    normalized = re.sub(r"^q-", "", name.lower())
    return COMPONENT_ALIASES.get(normalized, normalized)


def component_name_variants(name: str) -> list[str]:
    """Alternative spellings tried after the direct path misses, in order."""
    variants = [
        name,
        name.replace("-", ""),
        re.sub(r"([a-z])([A-Z])", r"\1-\2", name).lower(),
    ]
    return list(dict.fromkeys(variants))


def component_paths(name: str, section: str = "vue-components") -> list[str]:
    """Every candidate file path for a normalized component name, direct path first."""
    candidates = [f"{section}/{name}{MARKDOWN_EXT}"]
    candidates += [f"{section}/{v}{MARKDOWN_EXT}" for v in component_name_variants(name)]
    return list(dict.fromkeys(candidates))


def normalize_page_path(path: str) -> str:
    """``/style/color-palette/`` -> ``style/color-palette.md``."""
    path = re.sub(r"^/", "", path)
    path = re.sub(r"/$", "", path)
    if not path.endswith(MARKDOWN_EXT):
        path = f"{path}{MARKDOWN_EXT}"
    return path


def index_page_path(path: str) -> str:
    """Secondary lookup for directory-style paths: ``start.md`` -> ``start/index.md``."""
    return re.sub(r"\.md$", "/index.md", path)
