"""
Hook services — hook runner, git templates and commit-message lint.
"""

from hookstrap.core.services.hooks.git_templates import register_git_templates
from hookstrap.core.services.hooks.runner import configured_hook_ids, install_hooks, run_checks

__all__ = [
    "configured_hook_ids",
    "install_hooks",
    "register_git_templates",
    "run_checks",
]
