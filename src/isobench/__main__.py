"""Run the benchmark: ``python -m isobench``."""

from isobench.benchmark import main

if __name__ == "__main__":
    raise SystemExit(main())
