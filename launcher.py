# launcher.py — frozen-build entrypoint (PyInstaller)

import datetime
import os
import sys
import traceback

from spice_pos.core.paths import BASE_DIR

os.environ.setdefault("QT_SCALE_FACTOR_ROUNDING_POLICY", "PassThrough")


def _write_crash(prefix: str, exc: BaseException | None = None) -> None:
    try:
        ts = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
        BASE_DIR.mkdir(parents=True, exist_ok=True)
        fn = BASE_DIR / f"SpicePOS-crash-{prefix}-{ts}.log"
        with open(fn, "w", encoding="utf-8") as f:
            f.write(f"[{ts}] argv: {sys.argv}\n")
            for k in sorted(os.environ):
                if k.startswith("QT_") or k.startswith("SPICE_POS_"):
                    f.write(f"{k}={os.environ.get(k)}\n")
            if exc:
                f.write("\n--- TRACEBACK ---\n")
                traceback.print_exception(type(exc), exc, exc.__traceback__, file=f)
    except OSError:
        pass


try:
    from spice_pos.app import main
except Exception as e:
    _write_crash("import-app", e)
    raise

if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        _write_crash("runtime", e)
        raise
