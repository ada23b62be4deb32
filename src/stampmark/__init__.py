# topmark:header:start
#
#   project      : StampMark
#   file         : __init__.py
#   file_relpath : src/stampmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark package.

StampMark maintains ``created`` / ``modified`` timestamps in the front matter
block at the top of text documents. The pure header engine lives in
`stampmark.frontmatter`; the CLI and the polling watcher are thin hosts around it.
"""

from __future__ import annotations
