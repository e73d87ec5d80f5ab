"""Shared test fixtures for the blog engine."""

import sys
from pathlib import Path

import pytest

# Ensure blog_engine is importable
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from blog_engine.content.front_matter import dump_front_matter
from blog_engine.site.config import SiteConfig


SAMPLE_CONFIG_TOML = """\
baseURL = "https://support.tools/"
title = "Support Tools"
theme = "m10c"
pagination.pagerSize = 2

[menu]
  [[menu.main]]
    identifier = "home"
    name = "Home"
    url = "/"
    weight = 1

  [[menu.main]]
    identifier = "training"
    name = "Training"
    url = "/training/"
    weight = 6

  [[menu.main]]
    identifier = "rke2"
    name = "RKE2"
    url = "/training/rke2/"
    parent = "training"
    weight = 10

  [[menu.main]]
    identifier = "about"
    name = "About"
    url = "/about/"
    weight = 2

[params]
  author = "Matthew Mattox"
  description = "Matthew Mattox Personal Tech Blog"
  avatar = "https://cdn.support.tools/profiles/avatar-centered.png"
  menu_item_separator = " - "

  [[params.social]]
    icon = "github"
    name = "Github"
    url = "https://github.com/mattmattox"
"""


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def content_dir(tmp_path) -> Path:
    """An empty content directory."""
    directory = tmp_path / "content" / "post"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def write_post(content_dir):
    """Write a post with YAML front matter; returns its path."""

    def _write(name: str, body: str = "Body text.\n", **front_matter) -> Path:
        path = content_dir / name
        path.write_text(dump_front_matter(front_matter, body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_posts(write_post) -> list[Path]:
    """Three published posts and one draft."""
    return [
        write_post(
            "cifs.md",
            "Mount it.\n\n<!--more-->\n\n## Steps\n\nMore detail.\n",
            title="Mounting CIFS Shares",
            date="2024-03-10T09:00:00-05:00",
            tags=["CIFS", "Ubuntu"],
            categories=["Ubuntu"],
            description="Mounting SMB shares.",
            url="/mounting-cifs-shares/",
        ),
        write_post(
            "pdb.md",
            "Budgets for disruptions.\n",
            title="Pod Disruption Budgets",
            date="2024-06-02T12:00:00-05:00",
            tags=["Kubernetes"],
            categories=["Kubernetes"],
            description="PDBs.",
        ),
        write_post(
            "solid.md",
            "Five principles.\n",
            title="SOLID Principles",
            date="2023-11-20",
            tags=["Design", "kubernetes"],
            categories=["Programming"],
            description="SOLID.",
        ),
        write_post(
            "wip.md",
            "Not done.\n",
            title="Work In Progress",
            date="2024-07-01",
            draft=True,
            tags=["Go"],
            categories=["Programming"],
            description="Draft.",
        ),
    ]


@pytest.fixture
def site_config_path(tmp_path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text(SAMPLE_CONFIG_TOML, encoding="utf-8")
    return path


@pytest.fixture
def site_config(site_config_path) -> SiteConfig:
    return SiteConfig.load(site_config_path)
