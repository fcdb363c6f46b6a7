"""Tests for CLI commands."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from jd_renderer.cli.main import __version__, app
from jd_renderer.models.document import RenderedDocument

runner = CliRunner()


@pytest.fixture
def job_file(tmp_path):
    path = tmp_path / "job.json"
    path.write_text(json.dumps({"title": "Backend Engineer (Remote)!!", "description": "Build services."}))
    return path


@pytest.fixture
def company_file(tmp_path):
    path = tmp_path / "company.json"
    path.write_text(json.dumps({"company_name": "Acme Corp"}))
    return path


@pytest.fixture
def mock_service():
    service = MagicMock()
    service.try_generate = AsyncMock(
        return_value=RenderedDocument(
            content=b"%PDF-1.4 fake",
            filename="backend_engineer__remote____job_description.pdf",
            page_count=3,
        )
    )
    service.build_markup = AsyncMock(return_value="<html>preview</html>")
    return service


@pytest.fixture
def patched_pipeline(mock_service):
    """Replace the browser and service factory used by the commands."""
    with patch("jd_renderer.cli.commands.render.build_pdf_service") as mock_build, patch(
        "jd_renderer.cli.commands.render.BrowserSession"
    ) as mock_browser_cls:
        mock_build.return_value = mock_service
        mock_browser = MagicMock()
        mock_browser.stop = AsyncMock()
        mock_browser_cls.return_value = mock_browser
        yield mock_build, mock_browser


class TestRenderCommand:
    """Tests for render command."""

    def test_render_writes_pdf(self, job_file, company_file, tmp_path, patched_pipeline, mock_service):
        """Test rendering to an explicit output path."""
        output = tmp_path / "out.pdf"

        result = runner.invoke(app, ["render", str(job_file), "--company", str(company_file), "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_bytes() == b"%PDF-1.4 fake"
        assert "Job Description PDF" in result.stdout
        job, company = mock_service.try_generate.await_args.args
        assert job.title == "Backend Engineer (Remote)!!"
        assert company.company_name == "Acme Corp"
        _, mock_browser = patched_pipeline
        mock_browser.stop.assert_awaited_once()

    def test_render_defaults_to_derived_filename(self, job_file, tmp_path, patched_pipeline, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["render", str(job_file)])

        assert result.exit_code == 0
        assert (tmp_path / "backend_engineer__remote____job_description.pdf").exists()

    def test_render_no_settle(self, job_file, tmp_path, patched_pipeline):
        mock_build, _ = patched_pipeline

        runner.invoke(app, ["render", str(job_file), "-o", str(tmp_path / "x.pdf"), "--no-settle"])

        assert mock_build.call_args.kwargs["settle"] is False

    def test_render_failure_exits_1(self, job_file, tmp_path, patched_pipeline, mock_service):
        """Test that a failed generation prints an error and exits with code 1."""
        mock_service.try_generate = AsyncMock(return_value=None)
        output = tmp_path / "out.pdf"

        result = runner.invoke(app, ["render", str(job_file), "-o", str(output)])

        assert result.exit_code == 1
        assert not output.exists()
        _, mock_browser = patched_pipeline
        mock_browser.stop.assert_awaited_once()

    def test_render_invalid_job_exits_1(self, tmp_path, patched_pipeline, mock_service):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"description": "missing title"}))

        result = runner.invoke(app, ["render", str(bad)])

        assert result.exit_code == 1
        mock_service.try_generate.assert_not_called()

    def test_render_missing_file(self, tmp_path):
        result = runner.invoke(app, ["render", str(tmp_path / "nope.json")])

        assert result.exit_code != 0


class TestPreviewCommand:
    """Tests for preview command."""

    def test_preview_to_file(self, job_file, tmp_path, patched_pipeline):
        output = tmp_path / "preview.html"

        result = runner.invoke(app, ["preview", str(job_file), "-o", str(output)])

        assert result.exit_code == 0
        assert output.read_text(encoding="utf-8") == "<html>preview</html>"

    def test_preview_to_stdout(self, job_file, patched_pipeline):
        result = runner.invoke(app, ["preview", str(job_file)])

        assert result.exit_code == 0
        assert "<html>preview</html>" in result.stdout


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout
