# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Display hosts for the presentation state machine (pygame window or headless)."""
