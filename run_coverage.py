#!/usr/bin/env python3
"""
Coverage test runner for the minesweeper engine
Runs the test suite with coverage over the game package
"""

import argparse
import subprocess
import sys
import webbrowser
from pathlib import Path


def run_coverage(html: bool = False, open_report: bool = False) -> bool:
    """Run tests with coverage, optionally writing and opening an HTML report"""
    print("🧪 Running tests with coverage...")
    print("=" * 50)

    cmd = [
        sys.executable, "-m", "pytest",
        "tests/",
        "--cov=game",
        "--cov-report=term-missing",
        "-v"
    ]
    if html:
        cmd.append("--cov-report=html:htmlcov")

    try:
        result = subprocess.run(cmd, check=False)
    except FileNotFoundError:
        print("❌ Error: Python or pytest not found")
        return False

    if result.returncode == 0:
        print("\n✅ All tests passed!")
    else:
        print(f"\n❌ Some tests failed (exit code: {result.returncode})")

    html_report = Path("htmlcov/index.html")
    if html and html_report.exists():
        print(f"\n📊 Coverage report generated: {html_report.absolute()}")
        if open_report:
            webbrowser.open(f"file://{html_report.absolute()}")
            print("🌐 Coverage report opened in browser")

    return result.returncode == 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run the test suite with coverage")
    parser.add_argument("--html", action="store_true", help="Write an HTML report to htmlcov/")
    parser.add_argument("--open", action="store_true", help="Open the HTML report in a browser")
    args = parser.parse_args()

    success = run_coverage(html=args.html or args.open, open_report=args.open)
    sys.exit(0 if success else 1)
