#!/usr/bin/env python3
"""
FSM Arena — Server Launcher (minimal)

Copyright (c) 2026 SolisHQ (github.com/solishq). MIT License.

Usage:
    python run_server.py         # port 8000
    python run_server.py 3000
"""
import sys

import uvicorn
from fsm_arena.server import app

if __name__ == "__main__":
    port = int(sys.argv[1]) if len(sys.argv) > 1 else 8000
    print(f"FSM Arena server: http://localhost:{port}")
    uvicorn.run(app, host="0.0.0.0", port=port, log_level="warning")
