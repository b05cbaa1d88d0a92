"""
Tests for host project models — dependencies, source sets, tasks, lookups.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from smithywire.core.conventions import apply_java_conventions
from smithywire.core.errors import (
    DuplicateElementError,
    InvalidExtensionValueError,
    LifecycleError,
    MissingElementError,
    MissingTaskError,
    ProjectEvaluationError,
)
from smithywire.core.models import (
    Configuration,
    Dependency,
    Lookup,
    Project,
    SmithyExtension,
    SourceDirectorySet,
    SourceSet,
    Task,
)


class TestDependency:
    def test_parse_full_notation(self):
        d = Dependency.parse("software.amazon.smithy:smithy-model:1.2.3")
        assert d.group == "software.amazon.smithy"
        assert d.name == "smithy-model"
        assert d.version == "1.2.3"
        assert d.notation == "software.amazon.smithy:smithy-model:1.2.3"

    def test_parse_without_version(self):
        d = Dependency.parse("com.example:lib")
        assert d.version == ""
        assert d.notation == "com.example:lib"

    @pytest.mark.parametrize("notation", ["", "lib", ":lib:1.0", "a:b:c:d"])
    def test_parse_invalid(self, notation):
        with pytest.raises(ValueError, match="Invalid dependency notation"):
            Dependency.parse(notation)

    def test_matches_ignores_version(self):
        d = Dependency(group="g", name="n", version="1.0")
        assert d.matches("g", "n")
        assert not d.matches("g", "other")
        assert not d.matches("other", "n")

    def test_immutable(self):
        d = Dependency(group="g", name="n", version="1.0")
        with pytest.raises(ValidationError):
            d.version = "2.0"


class TestConfiguration:
    def test_all_dependencies_includes_inherited_in_order(self):
        impl = Configuration(name="implementation")
        runtime_only = Configuration(name="runtimeOnly")
        runtime = Configuration(name="runtimeClasspath")
        runtime.extend_from(impl, runtime_only)

        impl.add(Dependency.parse("a:one:1"))
        runtime_only.add(Dependency.parse("b:two:2"))
        runtime.add(Dependency.parse("c:three:3"))

        names = [d.name for d in runtime.all_dependencies]
        assert names == ["three", "one", "two"]
        assert runtime.extends_from == ["implementation", "runtimeOnly"]

    def test_all_dependencies_deduplicates(self):
        impl = Configuration(name="implementation")
        runtime = Configuration(name="runtimeClasspath")
        runtime.extend_from(impl)
        impl.add(Dependency.parse("a:one:1"))
        runtime.add(Dependency.parse("a:one:1"))
        assert len(runtime.all_dependencies) == 1

    def test_extend_from_ignores_self_and_repeats(self):
        a = Configuration(name="a")
        b = Configuration(name="b")
        a.extend_from(a, b, b)
        assert a.extends_from == ["b"]

    def test_cycle_does_not_recurse_forever(self):
        a = Configuration(name="a")
        b = Configuration(name="b")
        a.extend_from(b)
        b.extend_from(a)
        a.add(Dependency.parse("x:y:1"))
        assert [d.name for d in b.all_dependencies] == ["y"]

    def test_find(self):
        conf = Configuration(name="c")
        conf.add(Dependency.parse("g:n:1"))
        conf.add(Dependency.parse("g:m:1"))
        conf.add(Dependency.parse("g:n:2"))
        assert [d.version for d in conf.find("g", "n")] == ["1", "2"]

    def test_len_counts_own_dependencies(self):
        conf = Configuration(name="c")
        assert len(conf) == 0
        conf.add(Dependency.parse("g:n:1"))
        assert len(conf) == 1


class TestSourceSet:
    def test_conventional_layout(self):
        ss = SourceSet.create("main")
        assert ss.java.src_dirs == [Path("src/main/java")]
        assert ss.resources.src_dirs == [Path("src/main/resources")]
        assert ss.extensions == {}

    def test_src_dir_is_idempotent(self):
        sds = SourceDirectorySet(name="x")
        assert sds.src_dir("a/b") is True
        assert sds.src_dir(Path("a/b")) is False
        assert sds.src_dirs == [Path("a/b")]

    def test_files_lists_existing_files_only(self, tmp_path: Path):
        (tmp_path / "model" / "nested").mkdir(parents=True)
        (tmp_path / "model" / "a.smithy").write_text("")
        (tmp_path / "model" / "nested" / "b.smithy").write_text("")
        sds = SourceDirectorySet(name="x", src_dirs=[Path("model"), Path("missing")])
        files = sds.files(tmp_path)
        assert [f.name for f in files] == ["a.smithy", "b.smithy"]


class TestTask:
    def test_depends_on_adds_edges_once(self):
        t = Task(name="assemble")
        other = Task(name="jar")
        t.depends_on(other, "jar", "classes")
        assert t.prerequisites == ["jar", "classes"]
        assert t.has_prerequisite(other)
        assert not t.has_prerequisite("compileJava")


class TestLookup:
    def test_found(self):
        task = Task(name="jar")
        lookup = Lookup("task", "jar", task)
        assert lookup.found
        assert lookup.require() is task
        assert lookup.or_none() is task

    def test_missing_task_raises_missing_task_error(self):
        lookup = Lookup("task", "jar")
        assert not lookup.found
        assert lookup.or_none() is None
        with pytest.raises(MissingTaskError, match="jar"):
            lookup.require()

    def test_missing_other_element(self):
        with pytest.raises(MissingElementError) as exc:
            Lookup("configuration", "smithyCli").require()
        assert exc.value.kind == "configuration"
        assert not isinstance(exc.value, MissingTaskError)


class TestProject:
    def test_maybe_create_configuration(self, bare_project: Project):
        a = bare_project.maybe_create_configuration("smithyCli")
        b = bare_project.maybe_create_configuration("smithyCli")
        assert a is b

    def test_add_dependency_requires_configuration(self, bare_project: Project):
        with pytest.raises(MissingElementError):
            bare_project.add_dependency("implementation", "g:n:1")

    def test_add_dependency_from_notation(self, java_project: Project):
        dep = java_project.add_dependency("implementation", "g:n:1")
        assert java_project.configurations["implementation"].dependencies == [dep]

    def test_register_duplicate_task(self, bare_project: Project):
        bare_project.register_task(Task(name="jar"))
        with pytest.raises(DuplicateElementError):
            bare_project.register_task(Task(name="jar"))

    def test_duplicate_extension(self, bare_project: Project):
        bare_project.create_extension("smithy", SmithyExtension())
        with pytest.raises(DuplicateElementError):
            bare_project.create_extension("smithy", SmithyExtension())

    def test_file_resolves_against_project_dir(self, bare_project: Project, tmp_path: Path):
        assert bare_project.file("model") == tmp_path / "model"
        assert bare_project.file(tmp_path / "x") == tmp_path / "x"

    def test_evaluate_runs_callbacks_once_in_order(self, bare_project: Project):
        calls = []
        bare_project.after_evaluate(lambda p: calls.append("first"))
        bare_project.after_evaluate(lambda p: calls.append("second"))
        bare_project.evaluate()
        assert calls == ["first", "second"]
        assert bare_project.state == "evaluated"

        with pytest.raises(LifecycleError):
            bare_project.evaluate()
        assert calls == ["first", "second"]

    def test_after_evaluate_rejected_once_evaluated(self, bare_project: Project):
        bare_project.evaluate()
        with pytest.raises(LifecycleError):
            bare_project.after_evaluate(lambda p: None)

    def test_failing_callback_aborts_evaluation(self, bare_project: Project):
        calls = []

        def boom(project):
            raise MissingTaskError("jar")

        bare_project.after_evaluate(boom)
        bare_project.after_evaluate(lambda p: calls.append("later"))

        with pytest.raises(ProjectEvaluationError) as exc:
            bare_project.evaluate()
        assert isinstance(exc.value.cause, MissingTaskError)
        assert bare_project.state == "failed"
        assert calls == []


class TestJavaConventions:
    def test_creates_layout(self, java_project: Project):
        assert set(java_project.source_sets) == {"main", "test"}
        for name in ("compileJava", "jar", "assemble", "build"):
            assert java_project.find_task(name).found
        assert java_project.tasks["assemble"].has_prerequisite("jar")
        assert java_project.configurations["runtimeClasspath"].extends_from == [
            "implementation",
            "runtimeOnly",
        ]

    def test_apply_twice_is_noop(self, java_project: Project):
        assert apply_java_conventions(java_project) is False
        assert java_project.applied_plugins == ["java"]


class TestSmithyExtension:
    def test_unset_means_none(self):
        ext = SmithyExtension()
        assert ext.projection is None
        assert ext.output_directory is None
        assert ext.cli_version_override is None

    def test_defaults_supplied_on_read(self, tmp_path: Path):
        ext = SmithyExtension()
        assert ext.resolve_projection() == "source"
        assert ext.resolve_output_directory(tmp_path, "demo") == (
            tmp_path / "build" / "smithyprojections" / "demo"
        )
        assert ext.resolve_cli_version_override() is None

    def test_relative_output_directory(self, tmp_path: Path):
        ext = SmithyExtension(output_directory="build/out")
        assert ext.resolve_output_directory(tmp_path, "demo") == tmp_path / "build" / "out"

    def test_invalid_values_fail_on_read_not_on_set(self):
        ext = SmithyExtension()
        ext.projection = "bad projection!"
        ext.cli_version_override = ""
        with pytest.raises(InvalidExtensionValueError, match="projection"):
            ext.resolve_projection()
        with pytest.raises(InvalidExtensionValueError, match="cli_version_override"):
            ext.resolve_cli_version_override()

    @pytest.mark.parametrize(
        "option, value",
        [("projection", "source\n"), ("cli_version_override", "1.2.3\n")],
    )
    def test_trailing_newline_is_invalid(self, option, value):
        ext = SmithyExtension(**{option: value})
        with pytest.raises(InvalidExtensionValueError, match=option):
            getattr(ext, f"resolve_{option}")()

    def test_locked_extension_rejects_writes(self):
        ext = SmithyExtension()
        ext.lock()
        assert ext.locked
        with pytest.raises(LifecycleError):
            ext.projection = "source"
