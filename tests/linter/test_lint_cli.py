"""Tests for the linter command line."""

from blog_engine.linter.main import main


class TestLintCli:
    def test_clean_corpus_exits_zero(self, content_dir, sample_posts, capsys):
        code = main(["--content-dir", str(content_dir)])
        out = capsys.readouterr().out
        assert code == 0
        assert "wip.md: warning: [draft] post is marked draft" in out
        assert "4 files checked: 0 errors, 1 warnings" in out

    def test_fail_on_draft(self, content_dir, sample_posts):
        assert main(["--content-dir", str(content_dir), "--fail-on-draft"]) == 1

    def test_errors_exit_one(self, content_dir, write_post, capsys):
        write_post("untitled.md", title="", date="2024-01-01", description="d")
        assert main(["--content-dir", str(content_dir)]) == 1
        assert "[title]" in capsys.readouterr().out

    def test_missing_directory(self, tmp_path):
        assert main(["--content-dir", str(tmp_path / "missing")]) == 2

    def test_drafts_only_found(self, content_dir, sample_posts, capsys):
        code = main(["--content-dir", str(content_dir), "--drafts-only"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Draft content found" in out
        assert "wip.md" in out

    def test_drafts_only_none(self, content_dir, write_post, capsys):
        write_post("a.md", title="A")
        code = main(["--content-dir", str(content_dir), "--drafts-only"])
        assert code == 0
        assert "No draft content found" in capsys.readouterr().out

    def test_drafts_only_fail(self, content_dir, sample_posts):
        assert main(["--content-dir", str(content_dir), "--drafts-only", "--fail-on-draft"]) == 1
