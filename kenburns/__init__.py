# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Ken Burns slideshow fed by files, directories, HTTP endpoints and RSS/Atom feeds."""

__version__ = "0.1.0"
