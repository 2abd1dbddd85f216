#!/usr/bin/env python3
"""
Seed the recloser catalog database:
  - languages, component types and limit types (always)
  - the sample Zeus NG catalog (with --sample)

This is a thin entrypoint that delegates to the API's seeding implementation.
"""
from __future__ import annotations

from recloser_api.seed import main

if __name__ == "__main__":
    raise SystemExit(main())
