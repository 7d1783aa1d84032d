"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from stardestroyer.operators.base import PackageOperator, UninstallResult

INDEX_JS = """import React from 'react';
import { Chart } from './chart'; // $$chart
import track from './analytics'; // $$analytics

export function App() {
  // $$chart BEGIN
  const data = loadData();
  render(data);
  // $$chart END
  return null;
}
"""

APP_JSX = """export const Page = () => (
  <main>
    <Header />
    <Chart data={data} /> {/* $$chart */}
    {/* $$analytics BEGIN */}
    <Tracker id="main" />
    {/* $$analytics END */}
  </main>
);
"""

STYLES_CSS = """body { margin: 0; }
/* $$chart */
.chart { width: 100%; }
/* $$chart END */
"""


class RecordingOperator(PackageOperator):
    """Package operator that records uninstall calls instead of running npm."""

    def __init__(self, project_root: Path | None = None, dry_run: bool = False) -> None:
        super().__init__(project_root, dry_run)
        self.calls: list[tuple[list[str], bool]] = []

    @property
    def name(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        return True

    def uninstall(self, packages: list[str], save: bool) -> list[UninstallResult]:
        self.calls.append((list(packages), save))
        return [
            UninstallResult(package=p, success=True, dry_run=self.dry_run, saved=save)
            for p in packages
        ]


@pytest.fixture
def operator() -> RecordingOperator:
    """Package operator recording uninstall calls."""
    return RecordingOperator()


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """Block configuration matching the sample project."""
    return {
        "blocksInUse": ["core"],
        "blocks": {
            "core": {
                "paths": [],
                "dependencies": ["react"],
            },
            "chart": {
                "paths": ["src/chart.js", "src/charts"],
                "dependencies": ["chart.js", "greatest"],
            },
            "analytics": {
                "paths": ["src/analytics.js"],
                "dependencies": ["greatest"],
                "devDependencies": ["left-pad"],
            },
        },
    }


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[dict[str, Any], dict[str, str]], Path]:
    """Factory writing a project with a destroy.config.json and source files."""

    def _make(config: dict[str, Any], files: dict[str, str]) -> Path:
        (tmp_path / "destroy.config.json").write_text(json.dumps(config, indent=4))
        for relative, content in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content.encode("utf-8"))
        return tmp_path

    return _make


@pytest.fixture
def sample_project(
    make_project: Callable[[dict[str, Any], dict[str, str]], Path],
    sample_config_data: dict[str, Any],
) -> Path:
    """Small JavaScript project with chart and analytics blocks."""
    return make_project(
        sample_config_data,
        {
            "src/index.js": INDEX_JS,
            "src/App.jsx": APP_JSX,
            "src/styles.css": STYLES_CSS,
            "src/chart.js": "export const Chart = () => null;\n",
            "src/charts/line.js": "export const line = 1;\n",
            "src/analytics.js": "export default function track() {}\n",
            "node_modules/chart.js/index.js": "module.exports = {}; // $$chart\n",
            "README.md": "Chart docs // $$chart\n",
        },
    )
