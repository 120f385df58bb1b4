"""Node.js output strategy generating a standalone setup script.

For projects whose users have Node.js but not Python at hand. The script uses
only Node's built-in modules and follows the same steps as the Python script.
"""

import json
from string import Template

from dir2setup import __version__
from dir2setup.types import TreeMapping

from .base_strategy import OutputStrategy

SCRIPT_TEMPLATE = Template(
    """#!/usr/bin/env node
// Recreate the project tree in the current directory and set it up.
// Generated by dir2setup $version. Run it with no arguments from the directory
// that should contain the project. Existing files with the same names are overwritten.
const fs = require('fs');
const path = require('path');
const { execSync } = require('child_process');

const BACKEND_DIR = $backend_dir;
const FRONTEND_DIR = $frontend_dir;
const INSTALL_COMMAND = $install_command;
const SEED_SCRIPT = $seed_script;
const SEED_COMMAND = $seed_command;
const FALLBACK_INSTRUCTIONS = $fallback_instructions;
const START_INSTRUCTIONS = $start_instructions;

const projectStructure = $structure;

function createStructure(basePath, structure) {
  for (const [name, content] of Object.entries(structure)) {
    const fullPath = path.join(basePath, name);
    if (typeof content === 'object' && content !== null) {
      if (!fs.existsSync(fullPath)) {
        fs.mkdirSync(fullPath, { recursive: true });
        console.log('Creating directory: ' + fullPath);
      }
      createStructure(fullPath, content);
    } else {
      fs.writeFileSync(fullPath, content, 'utf8');
      console.log('Creating file: ' + fullPath);
    }
  }
}

function runCommand(command, cwd, description) {
  try {
    console.log('Starting ' + description + '...');
    execSync(command, { cwd, stdio: 'inherit' });
    console.log(description + ' finished');
  } catch (error) {
    console.error(description + ' failed:', error.message);
    console.error('You can try installing the dependencies manually:');
    FALLBACK_INSTRUCTIONS.forEach((instruction, i) => console.error((i + 1) + '. ' + instruction));
    process.exit(1);
  }
}

function main() {
  const root = process.cwd();
  try {
    console.log('Creating project structure...');
    createStructure(root, projectStructure);
    console.log('Project structure created.');
  } catch (err) {
    console.error('Error while creating the project:', err.message);
    process.exit(1);
  }

  const backend = path.join(root, BACKEND_DIR);
  const frontend = path.join(root, FRONTEND_DIR);

  if (fs.existsSync(backend)) {
    runCommand(INSTALL_COMMAND, backend, 'Installing backend dependencies');
  }

  if (fs.existsSync(frontend)) {
    runCommand(INSTALL_COMMAND, frontend, 'Installing frontend dependencies');
  }

  if (fs.existsSync(path.join(backend, SEED_SCRIPT))) {
    runCommand(SEED_COMMAND, backend, 'Seeding initial data');
  }

  console.log('\\nAll done!');
  console.log('Start the services with:');
  START_INSTRUCTIONS.forEach((instruction, i) => console.log((i + 1) + '. ' + instruction));
}

main();
"""
)


def _js(value: object, indent: int = 0) -> str:
    """Encode a value as a JavaScript literal."""
    return json.dumps(value, indent=indent or None)


class NodeOutputStrategy(OutputStrategy):
    """Output strategy that generates a standalone Node.js setup script.

    The snapshot is embedded as JSON, which is a valid JavaScript object literal;
    non-ASCII text is escaped so the script itself stays plain ASCII.

    Example:
        >>> script = NodeOutputStrategy().emit({"frontend": {"package.json": "{}"}})
        >>> 'const INSTALL_COMMAND = "npm install";' in script
        True
        >>> NodeOutputStrategy().get_default_filename()
        'setup-project.js'
    """

    def render(self, structure: TreeMapping) -> str:
        plan = self.setup_plan
        return SCRIPT_TEMPLATE.substitute(
            version=__version__,
            backend_dir=_js(plan.backend_dir),
            frontend_dir=_js(plan.frontend_dir),
            install_command=_js(plan.install_command),
            seed_script=_js(plan.seed_script),
            seed_command=_js(plan.seed_command),
            fallback_instructions=_js(list(plan.fallback_instructions)),
            start_instructions=_js(list(plan.start_instructions)),
            structure=_js(structure, indent=2),
        )

    def get_default_filename(self) -> str:
        return "setup-project.js"
