"""Python output strategy generating a standalone setup script.

The generated script depends on nothing but the Python standard library. It
carries the whole snapshot as a literal, recreates it in the directory it is run
from, then installs dependencies and seeds data as described by the setup plan.
"""

import pprint
from string import Template

from dir2setup import __version__
from dir2setup.types import TreeMapping

from .base_strategy import OutputStrategy

SCRIPT_TEMPLATE = Template(
    '''#!/usr/bin/env python3
"""Recreate the project tree in the current directory and set it up.

Generated by dir2setup $version. Run it with no arguments from the directory
that should contain the project. Existing files with the same names are
overwritten.
"""

import os
import subprocess
import sys

BACKEND_DIR = $backend_dir
FRONTEND_DIR = $frontend_dir
INSTALL_COMMAND = $install_command
SEED_SCRIPT = $seed_script
SEED_COMMAND = $seed_command
FALLBACK_INSTRUCTIONS = $fallback_instructions
START_INSTRUCTIONS = $start_instructions

PROJECT_STRUCTURE = $structure


def create_structure(base_path, structure):
    for name, content in structure.items():
        full_path = os.path.join(base_path, name)
        if isinstance(content, dict):
            if not os.path.isdir(full_path):
                os.makedirs(full_path, exist_ok=True)
                print(f"Creating directory: {full_path}")
            create_structure(full_path, content)
        else:
            with open(full_path, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            print(f"Creating file: {full_path}")


def fail(message):
    print(message, file=sys.stderr)
    print("You can try installing the dependencies manually:", file=sys.stderr)
    for number, instruction in enumerate(FALLBACK_INSTRUCTIONS, 1):
        print(f"{number}. {instruction}", file=sys.stderr)
    sys.exit(1)


def run_command(command, cwd, description):
    print(f"Starting {description}...")
    sys.stdout.flush()
    try:
        result = subprocess.run(command, cwd=cwd, shell=True)
    except OSError as e:
        fail(f"{description} failed: {e}")
    if result.returncode != 0:
        fail(f"{description} failed: '{command}' exited with status {result.returncode}")
    print(f"{description} finished")


def main():
    for stream in (sys.stdout, sys.stderr):
        stream.reconfigure(errors="backslashreplace")
    root = os.getcwd()
    try:
        print("Creating project structure...")
        create_structure(root, PROJECT_STRUCTURE)
        print("Project structure created.")
    except OSError as e:
        print(f"Error while creating the project: {e}", file=sys.stderr)
        return 1

    backend = os.path.join(root, BACKEND_DIR)
    frontend = os.path.join(root, FRONTEND_DIR)

    if os.path.isdir(backend):
        run_command(INSTALL_COMMAND, backend, "Installing backend dependencies")

    if os.path.isdir(frontend):
        run_command(INSTALL_COMMAND, frontend, "Installing frontend dependencies")

    if os.path.isfile(os.path.join(backend, SEED_SCRIPT)):
        run_command(SEED_COMMAND, backend, "Seeding initial data")

    print()
    print("All done!")
    print("Start the services with:")
    for number, instruction in enumerate(START_INSTRUCTIONS, 1):
        print(f"{number}. {instruction}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
'''
)


class PythonOutputStrategy(OutputStrategy):
    """Output strategy that generates a standalone Python setup script.

    The snapshot is embedded with ``pprint.pformat``, which yields a valid Python
    literal for any text content (escapes, quotes and non-ASCII text included), so
    the script writes every file back exactly as it was read.

    Example:
        >>> script = PythonOutputStrategy().emit({"backend": {"server.js": "console.log(1)"}})
        >>> "PROJECT_STRUCTURE = {'backend': {'server.js': 'console.log(1)'}}" in script
        True
        >>> "INSTALL_COMMAND = 'npm install'" in script
        True
    """

    def render(self, structure: TreeMapping) -> str:
        plan = self.setup_plan
        return SCRIPT_TEMPLATE.substitute(
            version=__version__,
            backend_dir=repr(plan.backend_dir),
            frontend_dir=repr(plan.frontend_dir),
            install_command=repr(plan.install_command),
            seed_script=repr(plan.seed_script),
            seed_command=repr(plan.seed_command),
            fallback_instructions=pprint.pformat(list(plan.fallback_instructions), width=100),
            start_instructions=pprint.pformat(list(plan.start_instructions), width=100),
            structure=pprint.pformat(structure, indent=1, width=100),
        )

    def get_default_filename(self) -> str:
        return "setup-project.py"
