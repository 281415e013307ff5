"""Test render_main() callable API and the CLI entry point.

Validates that cfrs.render.render_main() and main():
    - Write PNG/JPEG stills and GIF animations chosen by extension
    - Return dict with expected keys
    - Sample one frame per interval of pause time
    - Export nothing when the program is malformed
    - Merge --job YAML with explicit CLI arguments
    - Map failures to exit codes (1 program, 2 config)

Run:
    pytest tests/test_render_main.py -v
"""

import sys

import pytest
from PIL import Image

from cfrs.interpreter.errors import UnmatchedCloseBracket
from cfrs.render import EXIT_CONFIG, EXIT_FAILURE, EXIT_OK, main, render_main
from cfrs.utils import fs
from cfrs.utils.validators import RenderJobV1


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """main() installs handlers and an excepthook; undo both after each test."""
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    yield
    from cfrs.utils import logging_config
    logging_config.setup_logging(to_stderr=False, capture_warnings=False)
    logging_config.pop_context()


# ============================================================================
# render_main
# ============================================================================

def test_render_png(tmp_path):
    job = RenderJobV1(width=4, height=4, output=tmp_path / "f.png", commands="F")
    result = render_main(job)

    assert set(result) == {'output_path', 'steps', 'frames', 'final_position', 'summary_path'}
    assert result['steps'] == 1
    assert result['frames'] == 0
    assert result['final_position'] == (1, 0)
    assert result['summary_path'] is None

    with Image.open(tmp_path / "f.png") as img:
        assert img.size == (4, 4)
        assert img.getpixel((1, 0)) == (255, 255, 255, 255)
        assert img.getpixel((1, 1)) == (0, 0, 0, 255)


def test_render_background(tmp_path):
    job = RenderJobV1(
        width=3, height=3, background="blue", output=tmp_path / "b.png", commands="",
    )
    render_main(job)
    with Image.open(tmp_path / "b.png") as img:
        assert set(img.getdata()) == {(0, 0, 255, 255)}


def test_render_jpeg(tmp_path):
    job = RenderJobV1(width=8, height=8, output=tmp_path / "j.jpg", commands="[[[F]]]")
    render_main(job)
    with Image.open(tmp_path / "j.jpg") as img:
        assert img.mode == "RGB"
        assert img.size == (8, 8)


def test_render_gif_samples_frames(tmp_path):
    # 8 pauses × 20 ms, one frame every 40 ms → 4 frames
    job = RenderJobV1(
        width=16, height=16, interval_ms=40,
        output=tmp_path / "a.gif", commands="[[[FS]]]",
    )
    result = render_main(job)
    assert result['frames'] == 4
    with Image.open(tmp_path / "a.gif") as img:
        assert img.n_frames == 4
        assert img.info.get("duration") == 40


def test_render_gif_without_pauses_writes_final_frame(tmp_path):
    job = RenderJobV1(width=8, height=8, output=tmp_path / "still.gif", commands="FFF")
    result = render_main(job)
    assert result['frames'] == 1
    assert (tmp_path / "still.gif").exists()


def test_pauses_ignored_for_stills(tmp_path):
    job = RenderJobV1(width=8, height=8, output=tmp_path / "s.png", commands="[[SF]]")
    result = render_main(job)
    assert result['frames'] == 0


def test_unmatched_bracket_exports_nothing(tmp_path):
    job = RenderJobV1(width=4, height=4, output=tmp_path / "bad.png", commands="F]")
    with pytest.raises(UnmatchedCloseBracket):
        render_main(job)
    assert not (tmp_path / "bad.png").exists()


def test_summary_written(tmp_path):
    job = RenderJobV1(
        width=4, height=4, output=tmp_path / "f.png", commands="[F]",
        summary=tmp_path / "summary.yaml",
    )
    result = render_main(job)
    summary = fs.load_yaml(result['summary_path'])
    assert summary['steps'] == 5
    assert summary['frames'] == 0
    assert summary['final_position'] == [1, 3]
    assert summary['job']['commands'] == "[F]"
    assert summary['job']['background'] == "Black"


# ============================================================================
# CLI
# ============================================================================

def test_cli_png(tmp_path, capsys):
    out = tmp_path / "cli.png"
    code = main(["--width", "4", "--height", "4", str(out), "F"])
    assert code == EXIT_OK
    assert out.exists()
    assert "cli.png" in capsys.readouterr().out


def test_cli_background_flag(tmp_path):
    out = tmp_path / "w.png"
    assert main(["-b", "WHITE", "--width", "2", "--height", "2", str(out), ""]) == EXIT_OK
    with Image.open(out) as img:
        assert img.getpixel((0, 0)) == (255, 255, 255, 255)


def test_cli_invalid_background(tmp_path):
    out = tmp_path / "x.png"
    assert main(["-b", "teal", str(out), "F"]) == EXIT_CONFIG
    assert not out.exists()


def test_cli_missing_command(tmp_path):
    assert main([str(tmp_path / "x.png")]) == EXIT_CONFIG


def test_cli_unmatched_bracket(tmp_path):
    out = tmp_path / "x.png"
    assert main(["--width", "4", "--height", "4", str(out), "]"]) == EXIT_FAILURE
    assert not out.exists()


def test_cli_missing_job_file(tmp_path):
    assert main(["--job", str(tmp_path / "nope.yaml")]) == EXIT_CONFIG


def test_cli_job_file_with_override(tmp_path):
    job_path = tmp_path / "job.yaml"
    fs.atomic_yaml_dump(
        {
            'schema': 'render_job.v1',
            'width': 8,
            'height': 8,
            'background': 'red',
            'output': str(tmp_path / "from_job.png"),
            'commands': '[[F]]',
        },
        job_path,
    )
    override = tmp_path / "override.png"
    assert main(["--job", str(job_path), "--width", "5", str(override)]) == EXIT_OK

    assert override.exists()
    assert not (tmp_path / "from_job.png").exists()
    with Image.open(override) as img:
        assert img.size == (5, 8)
        assert img.getpixel((0, 0)) == (255, 0, 0, 255)


def test_cli_installs_excepthook(tmp_path):
    before = sys.excepthook
    assert main(["--width", "2", "--height", "2", str(tmp_path / "h.png"), "F"]) == EXIT_OK
    assert sys.excepthook is not before
    assert sys.excepthook is not sys.__excepthook__


def test_cli_job_relative_paths_resolve_against_cwd(tmp_path, monkeypatch):
    job_dir = tmp_path / "jobs"
    job_dir.mkdir()
    fs.atomic_yaml_dump(
        {
            'schema': 'render_job.v1',
            'width': 4,
            'height': 4,
            'output': 'rel.png',
            'commands': 'F',
            'summary': 'rel.yaml',
        },
        job_dir / "job.yaml",
    )
    monkeypatch.chdir(tmp_path)
    assert main(["--job", "jobs/job.yaml"]) == EXIT_OK

    assert (tmp_path / "rel.png").exists()
    assert (tmp_path / "rel.yaml").exists()
    assert not (job_dir / "rel.png").exists()
