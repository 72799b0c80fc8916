"""Run local environment checks for pathcalc."""

import os
import platform
import sys
from pathlib import Path


def _ok(flag: bool) -> str:
    return "PASS" if flag else "FAIL"


def _warn(flag: bool) -> str:
    return "PASS" if flag else "WARN"


def _can_write(path: Path) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        probe = path.parent / ".pathcalc_write_test"
        probe.write_text("ok", encoding="utf-8")
        probe.unlink(missing_ok=True)
        return True
    except OSError:
        return False


def main() -> int:
    root = Path(__file__).resolve().parent
    print("pathcalc doctor")
    print(f"- OS: {platform.system()} {platform.release()}")
    print(f"- Python: {platform.python_version()} ({sys.executable})")

    py_ok = sys.version_info >= (3, 8)
    print(f"[{_ok(py_ok)}] Python >= 3.8")
    if not py_ok:
        return 1

    try:
        import pygame  # noqa: F401
        pg_ok = True
    except ImportError:
        pg_ok = False
    print(f"[{_warn(pg_ok)}] pygame available (needed for --preview only)")

    required = [
        root / "main.py",
        root / "pathcalc" / "pathing.py",
        root / "pathcalc" / "speed.py",
        root / "pathcalc" / "config.py",
    ]
    files_ok = all(p.exists() for p in required)
    print(f"[{_ok(files_ok)}] core files present")
    if not files_ok:
        for p in required:
            if not p.exists():
                print(f"       Missing: {p}")

    try:
        from pathcalc.config import CONFIG_FILENAME
        cfg_path = Path(os.getcwd()) / CONFIG_FILENAME
        import_ok = True
    except ImportError:
        cfg_path = Path(os.getcwd()) / "config.json"
        import_ok = False
    print(f"[{_ok(import_ok)}] pathcalc importable")

    writable = _can_write(cfg_path)
    print(f"[{_ok(writable)}] writable config path available")

    all_ok = py_ok and files_ok and import_ok and writable
    if all_ok:
        print("All checks passed.")
        return 0
    print("One or more checks failed.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
