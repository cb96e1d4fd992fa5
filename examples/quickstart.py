#!/usr/bin/env python3
"""Example: Quickstart

Registers a few checks, one of which raises, and prints one report.

Usage:
    python examples/quickstart.py

Requirements:
    pip install healthz-registry
"""
from __future__ import annotations

import json
import logging
import shutil

import healthz
from healthz import Component, Healthz, HealthzConfig, Status


def disk_space(h: Healthz, c: Component) -> Status:
    usage = shutil.disk_usage("/")
    free = usage.free / usage.total
    h.note(c.name, f"{free:.0%} free")
    if free < 0.05:
        return Status.FAIL
    if free < 0.15:
        return Status.WARNING
    return Status.PASS


def flaky_dependency(h: Healthz, c: Component) -> Status:
    raise ConnectionError("upstream refused connection")


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    print(f"healthz version: {healthz.__version__}")

    hz = Healthz(HealthzConfig(service_file=".example-service-id", notes_count=5))
    hz.add_check("filesystem", "disk", disk_space)
    hz.add_check("http", "billing-api", flaky_dependency)

    report = hz.run_checks()
    print(f"HTTP status: {report.http_status}")
    print(json.dumps(report.to_dict(), indent=2))


if __name__ == "__main__":
    main()
