"""
Package entry point: ``python -m ai_blog_summary``.
"""

from .cli import run


if __name__ == "__main__":
    run()
