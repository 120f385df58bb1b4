"""Tests for the Python setup script strategy, including running the generated scripts."""

import ast
import sys

import pytest

from dir2setup.exclusion_rules.pattern_rules import PatternExclusionRules
from dir2setup.output_strategies.python_strategy import PythonOutputStrategy
from dir2setup.setup_plan import SetupPlan
from dir2setup.snapshot_tree.snapshot_node import from_mapping
from dir2setup.snapshot_tree.snapshot_tree import SnapshotTree


@pytest.fixture
def quiet_plan(python_command):
    """A setup plan whose commands succeed without needing npm or node."""
    return SetupPlan(
        install_command=python_command("print('installed')"),
        seed_command=python_command("open('seeded.txt', 'w').close()"),
    )


def write_script(tmp_path, strategy, tree):
    script_path = tmp_path / "setup-project.py"
    script_path.write_text(strategy.emit(tree), encoding="utf-8")
    return script_path


def list_tree(root):
    """All files and directories below root, as relative posix paths."""
    return sorted(path.relative_to(root).as_posix() for path in root.rglob("*"))


def test_generated_script_is_valid_python():
    script = PythonOutputStrategy().emit({"backend": {"server.js": "console.log(1)"}})
    ast.parse(script)
    assert script.startswith("#!/usr/bin/env python3\n")


def test_structure_literal_matches_mapping():
    mapping = {
        "frontend": {"package.json": '{\n  "name": "shop"\n}\n', "src": {}},
        "notes.txt": "quotes ' \" ''' \"\"\" backslash \\ tab \t cr \r unicode é 😀",
    }
    script = PythonOutputStrategy().emit(mapping)

    module = ast.parse(script)
    assignments = {
        node.targets[0].id: node.value for node in module.body if isinstance(node, ast.Assign)
    }
    assert ast.literal_eval(assignments["PROJECT_STRUCTURE"]) == mapping


def test_setup_plan_is_embedded():
    plan = SetupPlan(install_command="yarn install", seed_script="seed.js", seed_command="node seed.js")
    script = PythonOutputStrategy(plan).emit({})

    assert "INSTALL_COMMAND = 'yarn install'" in script
    assert "SEED_SCRIPT = 'seed.js'" in script
    assert "SEED_COMMAND = 'node seed.js'" in script
    assert "cd backend && npm install" in script
    assert "cd frontend && npm run serve" in script


def test_emit_accepts_directory_node():
    strategy = PythonOutputStrategy()
    mapping = {"backend": {"server.js": "console.log(1)"}}
    assert strategy.emit(from_mapping(mapping)) == strategy.emit(mapping)


def test_emit_rejects_invalid_entry_names():
    with pytest.raises(ValueError):
        PythonOutputStrategy().emit({"../escape.txt": "x"})


def test_default_filename():
    strategy = PythonOutputStrategy()
    assert strategy.get_default_filename() == "setup-project.py"
    assert strategy.get_file_extension() == ".py"


def test_round_trip(tmp_path, run_script):
    source = tmp_path / "source"
    (source / "docs" / "empty").mkdir(parents=True)
    (source / "docs" / "guide.md").write_bytes("# Guide\r\n\r\nÜmlauts and emoji 😀\n".encode("utf-8"))
    (source / "src").mkdir()
    (source / "src" / "app.py").write_text("print('hello')\n")
    (source / "empty.txt").write_text("")
    target = tmp_path / "target"
    target.mkdir()

    tree = SnapshotTree(source).get_tree()
    script_path = write_script(tmp_path, PythonOutputStrategy(), tree)
    result = run_script(script_path, target)

    assert result.returncode == 0, result.stderr
    assert list_tree(target) == list_tree(source)
    for path in source.rglob("*"):
        if path.is_file():
            assert (target / path.relative_to(source)).read_bytes() == path.read_bytes()
    assert "Creating directory:" in result.stdout
    assert "Creating file:" in result.stdout
    assert "All done!" in result.stdout


def test_rerun_overwrites_without_error(tmp_path, run_script):
    mapping = {"src": {"app.py": "print('v1')\n"}}
    target = tmp_path / "target"
    target.mkdir()
    script_path = write_script(tmp_path, PythonOutputStrategy(), mapping)

    first = run_script(script_path, target)
    (target / "src" / "app.py").write_text("locally edited\n")
    second = run_script(script_path, target)

    assert first.returncode == 0, first.stderr
    assert second.returncode == 0, second.stderr
    assert (target / "src" / "app.py").read_text() == "print('v1')\n"
    assert "Creating directory:" not in second.stdout
    assert list_tree(target) == ["src", "src/app.py"]


def test_scenario_excluded_folders_are_not_recreated(sample_project, tmp_path, run_script, quiet_plan):
    target = tmp_path / "fresh"
    target.mkdir()
    tree = SnapshotTree(sample_project, PatternExclusionRules()).get_tree()
    script_path = write_script(tmp_path, PythonOutputStrategy(quiet_plan), tree)

    result = run_script(script_path, target)

    assert result.returncode == 0, result.stderr
    assert list_tree(target) == ["backend", "backend/server.js", "frontend", "frontend/package.json"]
    assert (target / "frontend" / "package.json").read_text() == "{}"
    assert (target / "backend" / "server.js").read_text() == "console.log(1)"
    assert "Installing backend dependencies finished" in result.stdout
    assert "Installing frontend dependencies finished" in result.stdout
    assert "Seeding initial data" not in result.stdout
    assert "cd backend && npm run dev" in result.stdout


def test_install_failure_aborts_before_seed(tmp_path, run_script, python_command):
    plan = SetupPlan(
        install_command=python_command("import sys; sys.exit(3)"),
        seed_command=python_command("open('seeded.txt', 'w').close()"),
    )
    mapping = {"backend": {"server.js": "console.log(1)", "seed-services.js": "// seed"}}
    target = tmp_path / "target"
    target.mkdir()
    script_path = write_script(tmp_path, PythonOutputStrategy(plan), mapping)

    result = run_script(script_path, target)

    assert result.returncode != 0
    assert "Installing backend dependencies failed" in result.stderr
    assert "exited with status 3" in result.stderr
    assert "1. Backend: cd backend && npm install" in result.stderr
    assert "2. Frontend: cd frontend && npm install" in result.stderr
    assert not (target / "backend" / "seeded.txt").exists()
    assert "All done!" not in result.stdout


def test_seed_runs_after_installs(tmp_path, run_script, quiet_plan):
    mapping = {"backend": {"seed-services.js": "// seed"}, "frontend": {}}
    target = tmp_path / "target"
    target.mkdir()
    script_path = write_script(tmp_path, PythonOutputStrategy(quiet_plan), mapping)

    result = run_script(script_path, target)

    assert result.returncode == 0, result.stderr
    assert (target / "backend" / "seeded.txt").exists()
    install_at = result.stdout.index("Installing frontend dependencies finished")
    assert result.stdout.index("Seeding initial data finished") > install_at


def test_seed_failure_aborts_with_instructions(tmp_path, run_script, python_command):
    plan = SetupPlan(
        install_command=python_command("pass"),
        seed_command=python_command("import sys; sys.exit(1)"),
    )
    mapping = {"backend": {"seed-services.js": "// seed"}}
    target = tmp_path / "target"
    target.mkdir()
    script_path = write_script(tmp_path, PythonOutputStrategy(plan), mapping)

    result = run_script(script_path, target)

    assert result.returncode == 1
    assert "Installing backend dependencies finished" in result.stdout
    assert "Seeding initial data failed" in result.stderr
    assert "cd frontend && npm install" in result.stderr


def test_steps_skipped_without_backend_or_frontend(tmp_path, run_script, python_command):
    plan = SetupPlan(install_command=python_command("import sys; sys.exit(1)"))
    target = tmp_path / "target"
    target.mkdir()
    script_path = write_script(tmp_path, PythonOutputStrategy(plan), {"README.md": "# Docs\n"})

    result = run_script(script_path, target)

    assert result.returncode == 0, result.stderr
    assert "Starting" not in result.stdout


def test_materialization_failure(tmp_path, run_script):
    target = tmp_path / "target"
    target.mkdir()
    (target / "src").write_text("a file where a directory is expected")
    script_path = write_script(tmp_path, PythonOutputStrategy(), {"src": {"app.py": ""}})

    result = run_script(script_path, target)

    assert result.returncode == 1
    assert "Error while creating the project" in result.stderr


@pytest.mark.skipif(sys.platform == "win32", reason="Shell quoting differs on Windows")
def test_commands_run_in_their_directory(tmp_path, run_script, python_command):
    plan = SetupPlan(install_command=python_command("import os; open('cwd.txt', 'w').write(os.getcwd())"))
    target = tmp_path / "target"
    target.mkdir()
    script_path = write_script(tmp_path, PythonOutputStrategy(plan), {"backend": {}, "frontend": {}})

    result = run_script(script_path, target)

    assert result.returncode == 0, result.stderr
    assert (target / "backend" / "cwd.txt").read_text().endswith("backend")
    assert (target / "frontend" / "cwd.txt").read_text().endswith("frontend")


def test_non_ascii_names_on_legacy_console(tmp_path, run_script):
    target = tmp_path / "target"
    target.mkdir()
    script_path = write_script(tmp_path, PythonOutputStrategy(), {"docs": {"说明.md": "hi"}})

    result = run_script(script_path, target, PYTHONIOENCODING="cp1252")

    assert result.returncode == 0, result.stderr
    assert (target / "docs" / "说明.md").read_text(encoding="utf-8") == "hi"
    assert "\\u8bf4\\u660e.md" in result.stdout
    assert "All done!" in result.stdout
