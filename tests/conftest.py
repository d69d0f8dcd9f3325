"""Shared fixtures for the settings search tests.

Puts the repository root on sys.path so the local settings_search package
is importable without installing it.
"""

import sys
from pathlib import Path

import pytest

_root_dir = Path(__file__).parent.parent
if str(_root_dir) not in sys.path:
    sys.path.insert(0, str(_root_dir))

from settings_search.matching.datastore import build_search_index  # noqa: E402
from settings_search.matching.models import SearchableSetting  # noqa: E402


@pytest.fixture
def settings():
    """A small corpus shaped like real editor settings."""
    return [
        SearchableSetting(
            id="editor.formatOnSave",
            title="Format On Save",
            description="Format a file on save",
            tags=["editor", "format"],
            category="Text Editor",
        ),
        SearchableSetting(
            id="editor.tabSize",
            title="Tab Size",
            description="The number of spaces a tab is equal to.",
            tags=["editor", "indentation"],
            category="Text Editor",
        ),
        SearchableSetting(
            id="editor.wordWrap",
            title="Word Wrap",
            description="Controls how lines should wrap.",
            enum_values=["off", "on", "wordWrapColumn", "bounded"],
            tags=["editor"],
            category="Text Editor",
        ),
        SearchableSetting(
            id="files.autoSave",
            title="Auto Save",
            description="Controls auto save of editors that have unsaved changes.",
            enum_values=["off", "afterDelay", "onFocusChange"],
            tags=["files", "save"],
            category="Files",
        ),
        SearchableSetting(
            id="security.workspace.trust.enabled",
            title="Workspace Trust: Enabled",
            description="Controls whether or not workspace trust is enabled.",
            tags=["security", "trust"],
            category="Security",
        ),
        SearchableSetting(
            id="json.format.enable",
            title="Enable JSON Formatter",
            description="Enable or disable the default JSON formatter.",
            enum_values=["json", "jsonc"],
            tags=["json"],
            category="Extensions",
        ),
    ]


@pytest.fixture
def index(settings):
    return build_search_index(settings)
