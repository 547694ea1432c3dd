# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Allow running with: python -m kenburns [options] ROOT..."""

from .main import run


if __name__ == "__main__":
    run()
