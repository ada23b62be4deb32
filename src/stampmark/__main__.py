# topmark:header:start
#
#   project      : StampMark
#   file         : __main__.py
#   file_relpath : src/stampmark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running StampMark via ``python -m stampmark``.

Delegates to :func:`stampmark.cli.main.cli`, the same entry point used by the
``stampmark`` console script.

Examples:
    Add missing timestamps to every Markdown file below ``notes/``::

        python -m stampmark check --apply notes
"""

from __future__ import annotations

from stampmark.cli.main import cli

if __name__ == "__main__":
    cli()
