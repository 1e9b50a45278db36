"""
Test runner script.

Runs the test suite; extra arguments are passed to pytest, e.g.
``python run_tests.py tests/services -k pricing``.
"""

import sys
import subprocess

def run_tests(args):
    """Run pytest with appropriate arguments."""
    cmd = [
        sys.executable,
        "-m",
        "pytest",
        *(args or ["tests/"]),
        "-v",
        "--tb=short",
    ]

    result = subprocess.run(cmd, capture_output=False)
    return result.returncode

if __name__ == "__main__":
    exit_code = run_tests(sys.argv[1:])
    sys.exit(exit_code)
