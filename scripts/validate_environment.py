#!/usr/bin/env python3
"""Validate local schedule board environment readiness."""

from __future__ import annotations

import importlib
import sys
from datetime import date, datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.domain.constraints import layout_config_from_settings
from backend.domain.models import CapacityRecord, Event, ViewportMeasurement
from backend.services.layout_service import build_render_model
from backend.services.text_fit_service import get_default_measurer
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True

    # CHECK 1 - Python version >= 3.11
    if sys.version_info >= (3, 11):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.11",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2 - Required packages importable
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("requests", "requests"),
        ("PIL", "Pillow"),
        ("pandas", "pandas"),
        ("streamlit", "streamlit"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    from importlib.metadata import PackageNotFoundError, version

    import_errors: list[str] = []
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            version(dist_name)
        except (ImportError, PackageNotFoundError) as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 3 - Settings and layout constants
    config = None
    try:
        config = layout_config_from_settings(get_settings())
        ok, line = _print_result("Layout configuration", True)
    except ValueError as exc:
        ok, line = _print_result("Layout configuration", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 4 - Font measurement
    try:
        measurer = get_default_measurer()
        short_width = measurer.name_width("Yoga")
        long_width = measurer.name_width("Varsity Field Hockey")
        if not 0 < short_width < long_width:
            raise RuntimeError(f"unexpected widths {short_width} / {long_width}")
        ok, line = _print_result("Label font measurement", True, f": {long_width:.1f}px")
    except (OSError, RuntimeError) as exc:
        ok, line = _print_result("Label font measurement", False, str(exc))
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 5 - Render model smoke run
    if config is not None:
        try:
            today = date.today()
            model = build_render_model(
                [
                    Event(
                        datetime.combine(today, datetime.min.time()).replace(hour=9, minute=15),
                        datetime.combine(today, datetime.min.time()).replace(hour=10, minute=15),
                        "Yoga",
                        "Studio A - wood floor",
                    )
                ],
                [CapacityRecord("Gymnasium", 40, 50, datetime.now())],
                ViewportMeasurement(width_px=1280, height_px=900),
                datetime.now(),
                config=config,
                reference_day=today,
            )
            blocks = sum(len(column.blocks) for column in model.columns)
            if blocks != 1:
                raise RuntimeError(f"expected 1 block, got {blocks}")
            ok, line = _print_result("Render model smoke run", True)
        except RuntimeError as exc:
            ok, line = _print_result("Render model smoke run", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    print(SEPARATOR_LINE)
    print(" Schedule Board Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
