#!/usr/bin/env python
"""
Run the Streamlit candle price calculator.

Usage:
    python scripts/run_app.py [--port 8501] [--headless]
"""
import argparse
import os
import subprocess
import sys
from pathlib import Path


def main():
    parser = argparse.ArgumentParser(description="Run the candle price calculator")
    parser.add_argument("--port", default="8501")
    parser.add_argument("--headless", action="store_true",
                        help="Don't open a browser window")
    args = parser.parse_args()

    project_root = Path(__file__).parent.parent
    ui_path = project_root / 'src' / 'candle_pricing' / 'ui' / 'app_streamlit.py'

    if not ui_path.exists():
        print(f"ERROR: calculator page not found at {ui_path}")
        sys.exit(1)

    # History and logs live under the project root
    (project_root / 'data').mkdir(exist_ok=True)

    env = os.environ.copy()
    src_path = str(project_root / 'src')
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [src_path, env.get("PYTHONPATH")]))

    cmd = [
        sys.executable, '-m', 'streamlit', 'run', str(ui_path),
        '--server.port', args.port,
        '--server.headless', 'true' if args.headless else 'false',
    ]
    print(f"Starting candle calculator on port {args.port}")

    try:
        subprocess.run(cmd, cwd=str(project_root), env=env)
    except KeyboardInterrupt:
        print("\nCalculator stopped.")


if __name__ == "__main__":
    main()
