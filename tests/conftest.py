"""Shared fixtures: a mocked copy of the Quasar docs tree on GitHub, fake clock, app state."""

from __future__ import annotations

import os
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta

import httpx
import pytest
import respx

from quasar_docs.config import Settings
from quasar_docs.state import AppState

RAW = "https://raw.githubusercontent.com/quasarframework/quasar/dev/docs/src/pages"
API = "https://api.github.com/repos/quasarframework/quasar/contents/docs/src/pages"

# directory path ("" is the docs root) -> [(name, type)]
DOCS_TREE: dict[str, list[tuple[str, str]]] = {
    "": [
        ("quasar-plugins", "dir"),
        ("start", "dir"),
        ("style", "dir"),
        ("vue-components", "dir"),
    ],
    "quasar-plugins": [("notify.md", "file"), ("loading-bar.md", "file")],
    "start": [("how-to-use.md", "file"), ("upgrade-guide", "dir")],
    "start/upgrade-guide": [("index.md", "file")],
    "style": [("color-palette.md", "file"), ("typography.md", "file")],
    "vue-components": [
        ("btn.md", "file"),
        ("btn-group.md", "file"),
        ("dialog.md", "file"),
        ("input.md", "file"),
        ("select.md", "file"),
        ("btn.json", "file"),
    ],
}

DOCS_CONTENT: dict[str, str] = {
    "vue-components/btn.md": (
        "---\n"
        "title: Button\n"
        "desc: The QBtn Vue component is used to create buttons.\n"
        "keywords: [button, 'click', \"Action\"]\n"
        "---\n"
        "# QBtn\n\n"
        "Quasar has a component called QBtn which is a button with a few extra useful features.\n\n"
        "## QBtn API\n\n"
        "See the props and events below.\n"
    ),
    "vue-components/btn-group.md": "# Button Group\n\nGroup several QBtn together.\n",
    "vue-components/dialog.md": "# Dialog\n\nQuasar Dialogs are a great way to offer choices.\n",
    "vue-components/input.md": "# Input\n\nThe QInput component is used to capture text.\n",
    "vue-components/select.md": "# Select\n\nThe QSelect component has two types of selection.\n",
    "style/color-palette.md": (
        "---\ntitle: Color Palette\n---\n\nQuasar Framework offers a wide selection of colors.\n"
        "Dark mode friendly brand colors are configured here.\n"
    ),
    "style/typography.md": "# Typography\n\nHeadings and text classes.\n",
    "quasar-plugins/notify.md": "# Notify\n\nNotify is a Quasar plugin that displays messages.\n",
    "quasar-plugins/loading-bar.md": "# Loading Bar\n\nA loading bar at the top of the page.\n",
    "start/how-to-use.md": "# How to use Quasar\n\nPick a build flavour first.\n",
    "start/upgrade-guide/index.md": "# Upgrade Guide\n\nUpgrading from v1 to v2.\n",
}


def listing_payload(
    tree: dict[str, list[tuple[str, str]]], dir_path: str
) -> list[dict[str, str]]:
    items = []
    for name, kind in tree[dir_path]:
        full = f"{dir_path}/{name}" if dir_path else name
        items.append(
            {
                "name": name,
                "path": f"docs/src/pages/{full}",
                "type": kind,
                "url": f"{API}/{full}",
            }
        )
    return items


def mock_docs(
    router: respx.Router,
    tree: dict[str, list[tuple[str, str]]] | None = None,
    content: dict[str, str] | None = None,
) -> dict[str, respx.Route]:
    """Register listing and raw-file routes. Unknown raw paths answer 404.

    Returns the listing routes keyed by directory path so tests can count calls.
    """
    tree = DOCS_TREE if tree is None else tree
    content = DOCS_CONTENT if content is None else content

    listing_routes = {}
    for dir_path in tree:
        url = f"{API}/{dir_path}" if dir_path else API
        listing_routes[dir_path] = router.get(url).mock(
            return_value=httpx.Response(200, json=listing_payload(tree, dir_path))
        )
    for path, body in content.items():
        router.get(f"{RAW}/{path}").mock(return_value=httpx.Response(200, text=body))
    router.get(url__startswith=RAW).mock(return_value=httpx.Response(404))
    router.get(url__startswith=API).mock(return_value=httpx.Response(404))
    return listing_routes


class FakeClock:
    """Callable clock whose time only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def router() -> Iterator[respx.Router]:
    with respx.mock(assert_all_called=False) as mocked:
        yield mocked


@pytest.fixture()
def docs_routes(router: respx.Router) -> dict[str, respx.Route]:
    return mock_docs(router)


@pytest.fixture()
async def app_state(clock: FakeClock, router: respx.Router) -> AppState:
    """AppState wired to a mocked GitHub and a fake clock."""
    async with httpx.AsyncClient() as client:
        yield AppState.create(Settings(), http_client=client, clock=clock)


@pytest.fixture()
def subprocess_env(tmp_path) -> dict[str, str]:
    """Environment for spawning the server: isolated cwd config, no inherited overrides."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("QUASAR_DOCS__")}
    env["QUASAR_DOCS__LOGGING__FORMAT"] = "text"
    env["HOME"] = str(tmp_path)
    return env
