"""Benchmark Isometry3 vs IsometryMatrix3 vs Transform3."""

from isobench.benchmark import main

if __name__ == "__main__":
    raise SystemExit(main())
