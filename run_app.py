"""Run Streamlit app from project root. Use: python run_app.py"""
import os
import subprocess
import sys

root = os.path.dirname(os.path.abspath(__file__))
env = dict(os.environ)
env["PYTHONPATH"] = os.pathsep.join(p for p in (root, env.get("PYTHONPATH", "")) if p)
subprocess.run(
    [sys.executable, "-m", "streamlit", "run", os.path.join(root, "career_match_ai", "app.py")],
    check=True,
    env=env,
)
