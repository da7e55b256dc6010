"""
End-to-end tests for the command line interface.
"""
import io
import json

import pytest

from texlate import main as cli
from texlate.config import get_config
from texlate.io_handlers import RenderResult


TEMPLATE = (
    "\\begin{template}set_output_filename(\"build/letter\")\\end{template}"
    "\\begin{template*}if prompt_bool(\"draft\", \"Draft?\")\\end{template*}DRAFT\n"
    "\\begin{template*}endif\\end{template*}"
    "Dear \\begin{template}prompt_string(\"name\", \"Recipient?\")\\end{template},\n"
)


@pytest.fixture
def workdir(tmp_path, monkeypatch, config_file):
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def fake_renderer(monkeypatch):
    """Replace the typesetter with a recorder."""
    runs = []

    def fake_run(self, tex_path, template_path, output_dir):
        runs.append((tex_path, template_path, output_dir))
        return [RenderResult(command=["pdflatex"], return_code=0)]

    monkeypatch.setattr(cli.RendererRunner, "run", fake_run)
    return runs


def run_cli(argv, console, answers=()):
    args = cli.parse_args(argv)
    stdin = io.StringIO("".join(f"{a}\n" for a in answers))
    stdout = io.StringIO()
    code = cli.run(args, get_config(), console=console, stdin=stdin, stdout=stdout)
    return code, stdout.getvalue()


class TestArguments:

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_args(["-V"])
        assert exc_info.value.code == 0
        assert "texlate" in capsys.readouterr().out

    def test_mode_is_required(self):
        with pytest.raises(SystemExit):
            cli.parse_args([])

    def test_template_must_exist(self, tmp_path):
        with pytest.raises(SystemExit):
            cli.parse_args(["create", str(tmp_path / "missing.tmpl")])

    def test_values_must_exist(self, tmp_path):
        with pytest.raises(SystemExit):
            cli.parse_args(["update", str(tmp_path / "missing.json")])


class TestCreateAndUpdate:

    def test_create_writes_paired_files(self, workdir, console, fake_renderer):
        template = workdir / "letter.tmpl"
        template.write_text(TEMPLATE, encoding="utf-8")

        code, stdout = run_cli(["create", str(template)], console, ["", "Smith & Sons"])

        assert code == 0
        assert stdout == ""
        tex = (workdir / "build" / "letter.tex").read_text(encoding="utf-8")
        assert tex == "Dear Smith \\& Sons,\n"
        values = json.loads((workdir / "build" / "letter.json").read_text(encoding="utf-8"))
        assert values == {"_template": str(template), "draft": "false", "name": "Smith & Sons"}
        assert fake_renderer == [(
            workdir / "build" / "letter.tex", str(template), workdir / "build"
        )]

    def test_update_replays_answers(self, workdir, console, fake_renderer):
        template = workdir / "letter.tmpl"
        template.write_text(TEMPLATE, encoding="utf-8")
        run_cli(["create", str(template)], console, ["", "Smith & Sons"])

        code, _ = run_cli(["update", str(workdir / "build" / "letter.json")], console, ["y", ""])

        assert code == 0
        tex = (workdir / "build" / "letter.tex").read_text(encoding="utf-8")
        assert tex.startswith("DRAFT\n")
        values = json.loads((workdir / "build" / "letter.json").read_text(encoding="utf-8"))
        assert values["draft"] == "true"
        assert values["name"] == "Smith & Sons"

    def test_update_finds_template_beside_values(self, workdir, console, fake_renderer):
        (workdir / "job").mkdir()
        (workdir / "job" / "letter.tmpl").write_text(TEMPLATE, encoding="utf-8")
        values = workdir / "job" / "answers.json"
        values.write_text(json.dumps({"_template": "letter.tmpl", "name": "Ann"}), encoding="utf-8")

        code, _ = run_cli(["update", str(values)], console, ["", ""])

        assert code == 0
        assert "Dear Ann," in (workdir / "build" / "letter.tex").read_text(encoding="utf-8")

    def test_no_output_filename_prints_document(self, workdir, console, fake_renderer):
        template = workdir / "plain.tmpl"
        template.write_text("Hello \\begin{template}prompt_string(\"who\", \"Who?\")\\end{template}\n",
                            encoding="utf-8")

        code, stdout = run_cli(["create", str(template)], console, ["World"])

        assert code == 0
        assert stdout == "Hello World\n"
        assert fake_renderer == []
        assert sorted(p.name for p in workdir.iterdir()) == ["config.json", "plain.tmpl"]

    def test_no_render_flag(self, workdir, console, fake_renderer):
        template = workdir / "letter.tmpl"
        template.write_text(TEMPLATE, encoding="utf-8")
        code, _ = run_cli(["--no-render", "create", str(template)], console, ["", "X"])
        assert code == 0
        assert fake_renderer == []
        assert (workdir / "build" / "letter.tex").exists()

    def test_render_failure_is_not_fatal(self, workdir, console, monkeypatch):
        monkeypatch.setattr(
            cli.RendererRunner, "run",
            lambda self, *a: [RenderResult(command=["pdflatex"], return_code=1)]
        )
        template = workdir / "letter.tmpl"
        template.write_text(TEMPLATE, encoding="utf-8")

        code, _ = run_cli(["create", str(template)], console, ["", "X"])

        assert code == 0
        assert "pdflatex failed" in console.file.getvalue()
        assert (workdir / "build" / "letter.json").exists()


class TestFatalErrors:

    def test_values_without_template(self, workdir, capsys):
        values = workdir / "answers.json"
        values.write_text(json.dumps({"name": "Ann"}), encoding="utf-8")
        assert cli.main(["update", str(values)]) == 1
        assert "does not record a template" in capsys.readouterr().err

    def test_malformed_values(self, workdir, capsys):
        values = workdir / "answers.json"
        values.write_text("{not json", encoding="utf-8")
        assert cli.main(["update", str(values)]) == 1
        assert "Malformed values file" in capsys.readouterr().err

    def test_template_error_writes_nothing(self, workdir, console):
        template = workdir / "broken.tmpl"
        template.write_text(
            "\\begin{template}set_output_filename(\"out\")\\end{template}"
            "\\begin{template}missing()\\end{template}",
            encoding="utf-8"
        )
        with pytest.raises(cli.TexlateError):
            run_cli(["create", str(template)], console)
        assert not (workdir / "out.tex").exists()
        assert not (workdir / "out.json").exists()

    def test_closed_input_aborts_run(self, workdir, console):
        template = workdir / "letter.tmpl"
        template.write_text(TEMPLATE, encoding="utf-8")
        with pytest.raises(cli.TexlateError):
            run_cli(["create", str(template)], console, [])
        assert not (workdir / "build").exists()

    def test_main_prints_documents_without_prompts(self, workdir, capsys):
        template = workdir / "static.tmpl"
        template.write_text("\\section{Intro}\n", encoding="utf-8")
        assert cli.main(["create", str(template)]) == 0
        assert capsys.readouterr().out == "\\section{Intro}\n"

    def test_bad_config_value_is_reported_before_writing(self, workdir, config_file, capsys):
        config_file.write_text(json.dumps({"renderer": {"passes": "abc"}}), encoding="utf-8")
        template = workdir / "letter.tmpl"
        template.write_text(TEMPLATE, encoding="utf-8")

        assert cli.main(["create", str(template)]) == 1
        assert "renderer.passes" in capsys.readouterr().err
        assert not (workdir / "build").exists()

    def test_config_directory_is_reported(self, workdir, capsys):
        template = workdir / "static.tmpl"
        template.write_text("x\n", encoding="utf-8")
        assert cli.main(["--config", str(workdir), "create", str(template)]) == 1
        assert "Cannot read config file" in capsys.readouterr().err
