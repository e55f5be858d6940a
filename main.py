"""
main.py - Server launcher and entry point.

Run this file to start the schedule board API:

    python main.py

The render model is served at http://127.0.0.1:8000/schedule and the
booking relay at http://127.0.0.1:8000/api/proxy.

This file does NOT contain application logic. See app.py for the FastAPI
application and service wiring.

Streamlit dashboard (separate process):
    streamlit run dashboard/app.py
"""

from __future__ import annotations

import uvicorn


HOST = "127.0.0.1"
PORT = 8000


def main() -> None:
    """Start the schedule board server."""
    print("=" * 60)
    print("  Recreation Schedule Board")
    print("=" * 60)
    print(f"  Server   : http://{HOST}:{PORT}")
    print(f"  Schedule : http://{HOST}:{PORT}/schedule")
    print(f"  API docs : http://{HOST}:{PORT}/docs")
    print("=" * 60)
    print("  Press CTRL+C to stop\n")

    uvicorn.run(
        "app:app",
        host=HOST,
        port=PORT,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    main()
