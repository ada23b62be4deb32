# topmark:header:start
#
#   project      : StampMark
#   file         : __init__.py
#   file_relpath : src/stampmark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark command-line interface (Click)."""
