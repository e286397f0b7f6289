"""
main.py — Sorting Visualizer JSON API
======================================
Thin Flask control layer over the sorting core.  It renders nothing: a
front-end fetches JSON and draws the bars itself.

Routes:
  GET  /api/algorithms         – metadata table (labels, complexity, pseudocode)
  POST /api/array/generate     – generate a new random array
  POST /api/array/import       – parse an array from text
  POST /api/config/algo        – select algorithm
  POST /api/config/speed       – set speed level / preset
  POST /api/run                – record selected algorithm over the array
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N (-1 = initial array)
  GET  /api/state              – current session state
  POST /api/compare            – record two algorithms, compare their metrics

State management:
  Small values (array, selected algo, speed) live in the Flask session.
  Recorded runs are too large for a cookie; they are kept in a bounded
  in-process store keyed by a token saved in the session.
"""

import logging
import os
import secrets
import sys
from collections import OrderedDict
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, session

from algorithms import get_algorithm, list_algorithms, require_algorithm
from core import SortVisualizerError, generate_array, parse_array
from engine import DEFAULT_CONFIG, Recorder, Stepper, compare, delay_for_speed, resolve_speed


logger = logging.getLogger(__name__)

MAX_RECORDINGS = 64


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure stdout logging for the app and the sorting core."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
    return logger


app = Flask(__name__)
app.secret_key = os.environ.get("SORTVIS_SECRET_KEY") or secrets.token_hex(32)

# token → (Recorder, Stepper positioned at the session's current step)
_recordings: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_array() -> list:
    if "array" not in session:
        session["array"] = generate_array(DEFAULT_CONFIG.default_size, seed=42)
    return list(session["array"])


def get_state() -> Dict[str, Any]:
    speed = session.get("speed", DEFAULT_CONFIG.default_speed)
    rec   = _current_recording()
    return {
        "array":         get_array(),
        "selected_algo": session.get("selected_algo", "bubble"),
        "speed":         speed,
        "delay":         delay_for_speed(speed),
        "current_step":  rec["stepper"].current_idx if rec else -1,
        "total_steps":   len(rec["recorder"].events) if rec else 0,
    }


def set_state(**kwargs):
    for k, v in kwargs.items():
        session[k] = v


def _store_recording(recorder: Recorder) -> str:
    stepper = recorder.stepper
    stepper.rewind()

    token = secrets.token_hex(8)
    _recordings[token] = {"recorder": recorder, "stepper": stepper}
    while len(_recordings) > MAX_RECORDINGS:
        _recordings.popitem(last=False)
    return token


def _current_recording() -> Optional[Dict[str, Any]]:
    token = session.get("run_token")
    return _recordings.get(token) if token else None


def _step_payload(stepper: Stepper) -> Dict[str, Any]:
    step = stepper.current_step
    return {
        "current_step": stepper.current_idx,
        "event":        step.to_dict() if step else None,
        "array":        list(stepper.array),
        "is_finished":  stepper.is_finished,
    }


def _error(message: str, status: int = 400):
    return jsonify({"error": message}), status


@app.errorhandler(SortVisualizerError)
def handle_sort_error(exc):
    return _error(str(exc))


@app.errorhandler(ValueError)
def handle_value_error(exc):
    return _error(str(exc))


# ---------------------------------------------------------------------------
# API: Metadata
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})


# ---------------------------------------------------------------------------
# API: Array
# ---------------------------------------------------------------------------
@app.route("/api/array/generate", methods=["POST"])
def api_array_generate():
    data = request.get_json(silent=True) or {}
    cfg  = DEFAULT_CONFIG

    try:
        size      = int(data.get("size", cfg.default_size))
        min_value = int(data.get("min", cfg.min_value))
        max_value = int(data.get("max", cfg.max_value))
    except (TypeError, ValueError):
        return _error("size, min and max must be integers")
    if not 0 <= size <= cfg.max_size:
        return _error(f"size must be between 0 and {cfg.max_size}")

    seed = data.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        return _error("seed must be an integer")

    array = generate_array(size=size, min_value=min_value, max_value=max_value, seed=seed)
    set_state(array=array, run_token=None)
    return jsonify({"array": array})


@app.route("/api/array/import", methods=["POST"])
def api_array_import():
    data  = request.get_json(silent=True) or {}
    array = parse_array(str(data.get("text", "")))
    if len(array) > DEFAULT_CONFIG.max_size:
        return _error(f"At most {DEFAULT_CONFIG.max_size} values are supported")

    set_state(array=array, run_token=None)
    return jsonify({"array": array})


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    data = request.get_json(silent=True) or {}
    info = require_algorithm(data.get("algo_key", "bubble"))
    set_state(selected_algo=info.key)
    return jsonify({"algorithm": info.to_dict()})


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data  = request.get_json(silent=True) or {}
    level = resolve_speed(data.get("speed", DEFAULT_CONFIG.default_speed))
    set_state(speed=level)
    return jsonify({"speed": level, "delay": delay_for_speed(level)})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data     = request.get_json(silent=True) or {}
    algo_key = data.get("algo_key") or session.get("selected_algo", "bubble")
    array    = get_array()

    rec = Recorder()
    rec.start(algo_key, array)
    metrics = rec.run_to_completion()

    token = _store_recording(rec)
    set_state(selected_algo=metrics.algo_key, run_token=token)
    logger.info("Recorded %s over %d value(s): %d step(s)", metrics.algo_key, len(array), metrics.total_steps)

    stepper = _recordings[token]["stepper"]
    return jsonify({
        "algorithm":   get_algorithm(metrics.algo_key).to_dict(),
        "metrics":     metrics.to_dict(),
        "total_steps": len(rec.events),
        **_step_payload(stepper),
    })


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    rec = _current_recording()
    if rec is None:
        return _error("Run an algorithm first")
    if not rec["stepper"].next_step():
        return _error("Already at last step")
    return jsonify(_step_payload(rec["stepper"]))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    rec = _current_recording()
    if rec is None:
        return _error("Run an algorithm first")
    if not rec["stepper"].prev_step():
        return _error("Already at first step")
    return jsonify(_step_payload(rec["stepper"]))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    rec = _current_recording()
    if rec is None:
        return _error("Run an algorithm first")

    data = request.get_json(silent=True) or {}
    idx  = data.get("index", 0)
    if not isinstance(idx, int) or not -1 <= idx < len(rec["recorder"].events):
        return _error("Invalid step index")

    rec["stepper"].goto_step(idx)
    return jsonify(_step_payload(rec["stepper"]))


@app.route("/api/state")
def api_state():
    return jsonify(get_state())


# ---------------------------------------------------------------------------
# API: Comparison Mode
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data  = request.get_json(silent=True) or {}
    left  = data.get("left")
    right = data.get("right")
    if not left or not right:
        return _error("Pick two algorithms to compare")

    array = get_array()
    recorders = []
    for key in (left, right):
        rec = Recorder()
        rec.start(key, array)
        rec.run_to_completion()
        recorders.append(rec)

    return jsonify(compare(*recorders).to_dict())


if __name__ == "__main__":
    setup_logging(os.environ.get("SORTVIS_LOG_LEVEL", "INFO"))
    app.run(debug=False, port=int(os.environ.get("PORT", 5000)))
