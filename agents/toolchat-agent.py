#!/usr/bin/env python3
# Toolchat — Conversational tool orchestration
# Copyright (C) 2025–2026 Neven Kordic <neven@broodlink.ai>
# SPDX-License-Identifier: AGPL-3.0-or-later
"""Script wrapper — delegates to the toolchat package.

Usage:
    python agents/toolchat-agent.py chat            # interactive mode
    python agents/toolchat-agent.py ask "weather in Paris"

Or use the package directly:
    python -m toolchat chat
"""

from toolchat.cli import main

main()
