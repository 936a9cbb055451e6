"""Tests for job body parsing and brace capture."""

import pytest

from redstart.exceptions import ErrorKind, ParseError
from redstart.model import Step
from redstart.project.jobs import capture_block, parse_job_body, resolve_cwd
from redstart.project.scanner import Scanner


def job(text, jobs=None, cwd="."):
    return parse_job_body(Scanner(text), jobs or {}, cwd=cwd)


class TestCaptureBlock:
    """Tests for depth-counter brace matching."""

    def test_simple(self):
        scanner = Scanner("{a}")
        assert capture_block(scanner) == (1, 2)
        assert scanner.at_end()

    def test_nested(self):
        """Test inner braces don't end the block."""
        source = "{ {b} } tail"
        scanner = Scanner(source)
        start, end = capture_block(scanner)
        assert source[start:end] == " {b} "
        assert scanner.peek() == " "

    def test_missing_open_brace(self):
        with pytest.raises(ParseError, match="Expected {, but found x") as exc:
            capture_block(Scanner("x"))
        assert exc.value.kind is ErrorKind.NESTING

    def test_missing_open_brace_at_end(self):
        with pytest.raises(ParseError, match="Expected {, but found nothing"):
            capture_block(Scanner(""))

    def test_unbalanced(self):
        """Test running out of input before the closing brace."""
        with pytest.raises(ParseError, match="Expected }, but found nothing") as exc:
            capture_block(Scanner("{ { }"))
        assert exc.value.kind is ErrorKind.NESTING
        assert exc.value.position == 5


class TestParseJobBody:
    """Tests for steps declared in a job."""

    def test_empty_body(self):
        assert job("   \n  ") == []

    def test_single_step(self):
        steps = job(" build {x: 1} ")
        assert steps == [Step(type="build", cwd=".", options={"x": 1})]

    def test_steps_in_declaration_order(self):
        steps = job('compile {\n  command: "cc"\n}\ntest {\n  filter: "unit"\n}')
        assert [s.type for s in steps] == ["compile", "test"]
        assert steps[0].options == {"command": "cc"}
        assert steps[1].options == {"filter": "unit"}

    def test_step_without_space_before_brace(self):
        assert job("build{x: 1}") == [Step("build", ".", {"x": 1})]

    def test_module_path_type(self):
        steps = job('@build/generic {\n command: "make"\n}')
        assert steps[0].type == "@build/generic"

    def test_empty_step_block(self):
        assert job("noop {}") == [Step("noop", ".", {})]

    def test_braces_inside_strings_are_counted(self):
        """Test balanced braces in values stay inside the step body."""
        steps = job('echo {\n message: "{x}"\n}')
        assert steps[0].options == {"message": "{x}"}

    def test_missing_brace(self):
        with pytest.raises(ParseError, match="Expected {, but found x"):
            job("build x")

    def test_missing_closing_brace(self):
        with pytest.raises(ParseError, match="Expected }, but found nothing"):
            job("build { x: 1")

    def test_invalid_option(self):
        with pytest.raises(ParseError, match="Word maybe is not a valid word"):
            job("build {\n flag: maybe\n}")


class TestUse:
    """Tests for the use directive."""

    def test_use_splices_steps(self):
        """Test use inserts the other job's steps at its position."""
        jobs = {"A": [Step("build", ".", {"x": 1})]}
        steps = job("use A  test {y: 2}", jobs)
        assert steps == [
            Step("build", ".", {"x": 1}),
            Step("test", ".", {"y": 2}),
        ]

    def test_use_in_the_middle(self):
        jobs = {"setup": [Step("fetch"), Step("install")]}
        steps = job("clean {a: 1}\nuse setup\nbuild {b: 2}", jobs)
        assert [s.type for s in steps] == ["clean", "fetch", "install", "build"]

    def test_use_reuses_resolved_steps(self):
        """Test the referenced steps are reused, not re-parsed."""
        original = Step("build", "/elsewhere", {"x": 1})
        steps = job("use A", {"A": [original]})
        assert steps[0] is original

    def test_used_step_options_are_read_only(self):
        """Test a step shared by two jobs cannot be changed through either."""
        jobs = {"A": job("build {x: 1}")}
        steps = job("use A", jobs)
        with pytest.raises(TypeError):
            steps[0].options["x"] = 2
        assert jobs["A"][0].options == {"x": 1}

    def test_use_twice(self):
        jobs = {"A": [Step("build")]}
        assert [s.type for s in job("use A use A", jobs)] == ["build", "build"]

    def test_use_unknown_job(self):
        source = "use missing"
        with pytest.raises(ParseError, match="No job with the name missing found") as exc:
            job(source)
        assert exc.value.kind is ErrorKind.SEMANTIC
        assert exc.value.position == 4


class TestStepCwd:
    """Tests for the cwd option of a step."""

    def test_default_cwd(self):
        assert job("build {x: 1}", cwd="/work")[0].cwd == "/work"

    def test_relative_cwd_is_joined(self):
        """Test a relative cwd is joined onto the inherited one."""
        steps = job('build {\n cwd: "src"\n x: 1\n}', cwd="/work")
        assert steps[0].cwd == "/work/src"
        assert steps[0].options == {"x": 1}

    def test_relative_cwd_from_default(self):
        assert job('build {\n cwd: "src/lib"\n}')[0].cwd == "src/lib"

    def test_absolute_cwd_replaces(self):
        steps = job('build {\n cwd: "/opt/app"\n}', cwd="/work")
        assert steps[0].cwd == "/opt/app"
        assert "cwd" not in steps[0].options

    def test_cwd_declared_twice(self):
        with pytest.raises(ParseError, match="more than one cwd"):
            job('build {\n cwd: "a"\n cwd: "b"\n}')

    @pytest.mark.parametrize("value", ["true", "5"])
    def test_cwd_must_be_a_string(self, value):
        source = "build {\n cwd: %s\n}" % value
        with pytest.raises(ParseError, match="The cwd of step build must be a string") as exc:
            job(source)
        assert exc.value.kind is ErrorKind.SEMANTIC
        assert exc.value.position == 0

    def test_resolve_cwd(self):
        assert resolve_cwd(".", "build") == "build"
        assert resolve_cwd("/a", "../b") == "/b"
        assert resolve_cwd("/a", "/c") == "/c"
