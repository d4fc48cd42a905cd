"""
Allow the collectibles package to be executed as a module.

This enables running the resolver with:
    python -m collectibles --source ethereum assets.json
"""

from collectibles.main import run

if __name__ == "__main__":
    run()
