from __future__ import annotations

COLORS = {
  "score": "#00B0FF",
  "origin": "#FF6D00",
  "winner": "#00C853",
  "window": "#263238",
  "ok": "#00C853",
  "warn": "#FFC400",
  "crit": "#FF1744",
  "neutral": "#90A4AE",
  "bg": "#121212",
  "panel": "#1E1E1E",
  "grid": "#263238",
}

# Badge levels for a converted magnitude under the active policy
THRESHOLDS = {
  "score_warn": 0.0,     # score < 0: outside the preferred window
  "score_crit": -1000.0,  # far outside (e.g. 1e6 under PREFER_1_1000 scores -1000)
}
