"""Post-scaffold setup steps carried by a generated setup script."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SetupPlan:
    """Commands and messages the generated script uses after recreating the tree.

    The generated script installs dependencies in the backend directory and then
    in the frontend directory, each only if that directory exists, and finally
    runs the seed script if it exists under the backend directory. Every command
    runs through the shell from inside its directory.

    Attributes:
        backend_dir: Name of the top-level backend directory.
        frontend_dir: Name of the top-level frontend directory.
        install_command: Dependency install command, run in both directories.
        seed_script: File name of the seed script inside the backend directory.
        seed_command: Command that runs the seed script.
        fallback_instructions: Manual install steps printed when a step fails.
        start_instructions: How to start the services, printed on success.

    Example:
        >>> plan = SetupPlan(install_command="yarn install")
        >>> plan.install_command, plan.seed_command
        ('yarn install', 'node seed-services.js')
    """

    backend_dir: str = "backend"
    frontend_dir: str = "frontend"
    install_command: str = "npm install"
    seed_script: str = "seed-services.js"
    seed_command: str = "node seed-services.js"
    fallback_instructions: Tuple[str, ...] = (
        "Backend: cd backend && npm install",
        "Frontend: cd frontend && npm install",
    )
    start_instructions: Tuple[str, ...] = (
        "Start the backend: cd backend && npm run dev",
        "Start the frontend (in a new terminal): cd frontend && npm run serve",
    )
