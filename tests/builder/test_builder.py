"""Tests for the static site builder and its CLI."""

from pathlib import Path

import pytest

from blog_engine.builder import SiteBuilder, output_path
from blog_engine.builder.main import main
from blog_engine.common.exceptions import BuildError
from blog_engine.content.loader import load_posts
from blog_engine.content.models import Post


@pytest.fixture
def output_dir(tmp_path) -> Path:
    return tmp_path / "public"


class TestOutputPath:
    def test_directory_path(self, tmp_path):
        assert output_path(tmp_path, "/post/a/") == (tmp_path / "post" / "a" / "index.html").resolve()

    def test_root(self, tmp_path):
        assert output_path(tmp_path, "/") == (tmp_path / "index.html").resolve()

    def test_file_path(self, tmp_path):
        assert output_path(tmp_path, "/sitemap.xml") == (tmp_path / "sitemap.xml").resolve()

    def test_escape_rejected(self, tmp_path):
        with pytest.raises(BuildError):
            output_path(tmp_path / "public", "/../../etc/passwd")


class TestSiteBuilder:
    def test_build_sample(self, content_dir, sample_posts, site_config, output_dir):
        result = SiteBuilder(site_config).build(load_posts(content_dir), output_dir)

        assert result.post_count == 3
        assert result.skipped_drafts == 1
        assert (output_dir / "mounting-cifs-shares" / "index.html").exists()
        assert (output_dir / "post" / "pdb" / "index.html").exists()
        assert (output_dir / "post" / "solid" / "index.html").exists()
        assert not (output_dir / "post" / "wip").exists()

    def test_home_paginated(self, content_dir, sample_posts, site_config, output_dir):
        SiteBuilder(site_config).build(load_posts(content_dir), output_dir)
        # pager_size is 2 in the sample config
        home = (output_dir / "index.html").read_text(encoding="utf-8")
        page2 = (output_dir / "page" / "2" / "index.html").read_text(encoding="utf-8")
        assert "Pod Disruption Budgets" in home
        assert "Mounting CIFS Shares" in home
        assert "SOLID Principles" in page2
        assert not (output_dir / "page" / "3").exists()

    def test_taxonomy_pages(self, content_dir, sample_posts, site_config, output_dir):
        SiteBuilder(site_config).build(load_posts(content_dir), output_dir)
        tags = (output_dir / "tags" / "index.html").read_text(encoding="utf-8")
        assert 'href="/tags/kubernetes/"' in tags
        kube = (output_dir / "tags" / "kubernetes" / "index.html").read_text(encoding="utf-8")
        assert "Pod Disruption Budgets" in kube
        assert "SOLID Principles" in kube
        assert (output_dir / "categories" / "ubuntu" / "index.html").exists()
        assert not (output_dir / "tags" / "go").exists()

    def test_drafts_included(self, content_dir, sample_posts, site_config, output_dir):
        result = SiteBuilder(site_config).build(
            load_posts(content_dir), output_dir, include_drafts=True
        )
        assert result.post_count == 4
        assert (output_dir / "post" / "wip" / "index.html").exists()
        assert (output_dir / "tags" / "go" / "index.html").exists()

    def test_sitemap_and_404(self, content_dir, sample_posts, site_config, output_dir):
        SiteBuilder(site_config).build(load_posts(content_dir), output_dir)
        sitemap = (output_dir / "sitemap.xml").read_text(encoding="utf-8")
        assert "<loc>https://support.tools/post/pdb/</loc>" in sitemap
        assert "<lastmod>2024-06-02</lastmod>" in sitemap
        assert "sitemap.xml</loc>" not in sitemap
        assert (output_dir / "404.html").exists()

    def test_clean_removes_stale_files(self, site_config, output_dir):
        output_dir.mkdir()
        (output_dir / "stale.html").write_text("old", encoding="utf-8")
        SiteBuilder(site_config).build([Post(title="A", slug="a")], output_dir)
        assert not (output_dir / "stale.html").exists()

    def test_no_clean_keeps_files(self, site_config, output_dir):
        output_dir.mkdir()
        (output_dir / "stale.html").write_text("old", encoding="utf-8")
        SiteBuilder(site_config).build([Post(title="A", slug="a")], output_dir, clean=False)
        assert (output_dir / "stale.html").exists()

    def test_static_files_copied(self, tmp_path, site_config, output_dir):
        static = tmp_path / "static"
        (static / "images").mkdir(parents=True)
        (static / "images" / "logo.png").write_bytes(b"\x89PNG")
        (static / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")

        result = SiteBuilder(site_config).build([], output_dir, static_dir=static)
        assert result.static_files == 2
        assert (output_dir / "images" / "logo.png").read_bytes() == b"\x89PNG"

    def test_collision_raises(self, site_config, output_dir):
        posts = [
            Post(title="A", url="/same/", source_path=Path("a.md")),
            Post(title="B", url="/same/", source_path=Path("b.md")),
        ]
        with pytest.raises(BuildError, match="/same/"):
            SiteBuilder(site_config).build(posts, output_dir)

    def test_collision_on_same_output_file(self, site_config, output_dir):
        posts = [
            Post(title="A", slug="foo", source_path=Path("a.md")),
            Post(title="B", url="/post/foo/index.html", source_path=Path("b.md")),
        ]
        with pytest.raises(BuildError, match="/post/foo/index.html"):
            SiteBuilder(site_config).build(posts, output_dir)

    def test_post_shadowing_term_page_raises(self, site_config, output_dir):
        post = Post(
            title="Kubernetes Hub",
            url="/categories/kubernetes/",
            categories=["Kubernetes"],
            source_path=Path("hub.md"),
        )
        with pytest.raises(BuildError, match="/categories/kubernetes/"):
            SiteBuilder(site_config).build([post], output_dir)

    @pytest.mark.parametrize("url", ["/", "/tags/", "/404.html", "/sitemap.xml"])
    def test_post_shadowing_generated_page_raises(self, site_config, output_dir, url):
        post = Post(title="A", url=url, source_path=Path("a.md"))
        with pytest.raises(BuildError, match="would overwrite"):
            SiteBuilder(site_config).build([post], output_dir)

    def test_pages_override_static_files(self, tmp_path, site_config, output_dir):
        static = tmp_path / "static"
        static.mkdir()
        (static / "404.html").write_text("static 404", encoding="utf-8")

        SiteBuilder(site_config).build([], output_dir, static_dir=static)
        assert (output_dir / "404.html").read_text(encoding="utf-8") != "static 404"

    def test_empty_site(self, site_config, output_dir):
        result = SiteBuilder(site_config).build([], output_dir)
        assert result.post_count == 0
        assert (output_dir / "index.html").exists()
        assert "/" in result.pages


class TestBuildCli:
    def _args(self, content_dir, site_config_path, output_dir):
        return [
            "--content-dir", str(content_dir),
            "--config", str(site_config_path),
            "--output", str(output_dir),
            "--static-dir", str(output_dir.parent / "no-static"),
        ]

    def test_build(self, content_dir, sample_posts, site_config_path, output_dir, capsys):
        code = main(self._args(content_dir, site_config_path, output_dir))
        assert code == 0
        assert (output_dir / "post" / "pdb" / "index.html").exists()
        assert "Built" in capsys.readouterr().out

    def test_lint_errors_abort(self, content_dir, write_post, site_config_path, output_dir):
        write_post("untitled.md", title="", date="2024-01-01", description="d")
        assert main(self._args(content_dir, site_config_path, output_dir)) == 1
        assert not output_dir.exists()

    def test_skip_lint_still_fails_on_broken_file(
        self, content_dir, site_config_path, output_dir
    ):
        (content_dir / "broken.md").write_text("---\ntitle: [\n---\n", encoding="utf-8")
        args = self._args(content_dir, site_config_path, output_dir) + ["--skip-lint"]
        assert main(args) == 1

    def test_missing_site_config(self, content_dir, sample_posts, tmp_path, output_dir):
        assert main(self._args(content_dir, tmp_path / "nope.toml", output_dir)) == 1

    def test_drafts_flag(self, content_dir, sample_posts, site_config_path, output_dir):
        args = self._args(content_dir, site_config_path, output_dir) + ["--drafts"]
        assert main(args) == 0
        assert (output_dir / "post" / "wip" / "index.html").exists()
