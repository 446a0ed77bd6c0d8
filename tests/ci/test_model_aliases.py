from __future__ import annotations

import importlib.util
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
SAMPLE = ROOT / "apps" / "model" / "sample_markets.json"


def _load_run_model_module():
    path = ROOT / "apps" / "run_model.py"
    spec = importlib.util.spec_from_file_location("run_model_module", path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_every_alias_points_to_a_script() -> None:
    module = _load_run_model_module()
    for alias, rel in module.SCRIPT_MAP.items():
        assert (ROOT / rel).is_file(), f"{alias} -> {rel} is missing"


def _run(*args: str) -> subprocess.CompletedProcess:
    cmd = [sys.executable, str(ROOT / "apps" / "run_model.py"), *args]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT / "src"), env.get("PYTHONPATH")]))
    return subprocess.run(cmd, check=False, capture_output=True, text=True, cwd=ROOT, env=env)


def test_repeg_cost_on_sample() -> None:
    proc = _run("repeg-cost", "--input", str(SAMPLE), "--symbol", "SOL", "--new-peg", "101000")
    print(proc.stdout)
    assert proc.returncode == 0, proc.stderr
    assert "Market: SOL" in proc.stdout
    assert "Repeg cost would be $999.00" in proc.stdout


def test_price_shock_scan_on_sample() -> None:
    proc = _run("price-shock-scan", "--input", str(SAMPLE), "--steps", "3")
    print(proc.stdout)
    assert proc.returncode == 0, proc.stderr
    assert "Market: SOL" in proc.stdout
    assert "Market: BTC" in proc.stdout
    assert "step 3:" in proc.stdout


def test_launcher_help_names_the_cost_models() -> None:
    proc = _run("--help")
    assert proc.returncode == 0, proc.stderr
    assert "repeg / adjust-K / price-shock" in proc.stdout
    for alias in ("repeg-cost", "adjust-k-cost", "price-shock-scan"):
        assert alias in proc.stdout
