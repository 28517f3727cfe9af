#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Test harness for MacroCalc integration tests.
Finds all .mc files under tests/integration/, runs the interpreter,
and verifies expected exit code / output / error messages.
"""

import os
import re
import subprocess
import sys
from pathlib import Path

INTERPRETER = [sys.executable, "src/macrocalc.py"]
TESTS_DIR = Path("tests/integration")


def parse_test_file(path: Path):
    """Extract expected exit code, stdout, and optional error from the file's first comment block."""
    content = path.read_text(encoding="utf-8")
    lines = content.splitlines()

    header_lines = []
    for line in lines:
        line = line.strip()
        if line.startswith("//"):
            header_lines.append(line[2:].strip())
        else:
            break

    expected = {
        "exit_code": None,
        "output": None,
        "error": False,
        "error_pattern": None,
    }
    for line in header_lines:
        m = re.match(r"EXPECTED:\s*exit_code=(\d+)", line, re.IGNORECASE)
        if m:
            expected["exit_code"] = int(m.group(1))
            continue
        # one OUTPUT line per line of program output
        m = re.match(r"OUTPUT:\s?(.*)", line, re.IGNORECASE)
        if m:
            if expected["output"] is None:
                expected["output"] = []
            expected["output"].append(m.group(1))
            continue
        m = re.match(r"EXPECTED:\s*error", line, re.IGNORECASE)
        if m:
            expected["error"] = True
            continue
        m = re.match(r"ERROR:\s*(.*)", line, re.IGNORECASE)
        if m:
            expected["error_pattern"] = m.group(1).strip()
            continue

    return expected


def run_test(test_path: Path):
    """Run a single integration test and return (success, message)."""
    expected = parse_test_file(test_path)

    proc = subprocess.run(
        INTERPRETER + [str(test_path)],
        capture_output=True,
        text=True,
        cwd=Path.cwd(),
    )

    if expected["error"]:
        if proc.returncode == 0:
            return False, "Expected an error, but the script succeeded"
        if expected["error_pattern"]:
            if expected["error_pattern"] not in proc.stderr:
                return (
                    False,
                    f"Expected error pattern {expected['error_pattern']!r} not found in stderr:\n{proc.stderr}",
                )
    elif proc.returncode != 0 and expected["exit_code"] is None:
        return False, f"Script failed (exit {proc.returncode}):\n{proc.stderr}"

    if (
        expected["exit_code"] is not None
        and proc.returncode != expected["exit_code"]
    ):
        return (
            False,
            f"Exit code {proc.returncode} != expected {expected['exit_code']}",
        )

    if expected["output"] is not None:
        got = proc.stdout.rstrip("\n")
        want = "\n".join(expected["output"]).rstrip("\n")
        if got != want:
            return False, f"Output mismatch:\n  got:  {got!r}\n  want: {want!r}"

    return True, "OK"


def main():
    tests = sorted(TESTS_DIR.rglob("*.mc"))
    if not tests:
        print("No integration tests found.")
        return 1

    failed = 0
    for test in tests:
        rel = os.path.relpath(str(test), start=str(Path.cwd()))
        print(f"TEST {rel} ... ", end="", flush=True)
        ok, msg = run_test(test)
        if ok:
            print("PASS")
        else:
            print("FAIL")
            print(f"  {msg}")
            failed += 1

    if failed:
        print(f"\n{len(tests) - failed} passed, {failed} failed")
        return 1
    print(f"\nAll {len(tests)} tests passed.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
