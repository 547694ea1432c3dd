# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Streaming module for kenburns.

This module handles the handoff between the source walker and the display:
- Capacity-zero rendezvous channel
- Background worker thread running the walker
"""

from .channel import RendezvousChannel
from .core import SourceWorker, start_source_worker


__all__ = ["RendezvousChannel", "SourceWorker", "start_source_worker"]
