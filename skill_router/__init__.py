"""Route a free-text task description to the best-matching skill playbook."""

__version__ = "0.1.0"
