"""
Entry point for running the planner as a module.

Usage:
    python -m curriculum plan input.json -o plan.json
    python -m curriculum validate input.json
    python -m curriculum weeks input.json
    python -m curriculum view plan.json --distribution
"""

from curriculum.cli import main

if __name__ == "__main__":
    main()
