import configparser
from dataclasses import replace
from pathlib import Path

from solver.config import DEFAULT_CONFIG, GRADE_POLICIES, SolverConfig

SECTION = "solver"

DEFAULT_SETTINGS = {
    "path_max": str(DEFAULT_CONFIG.path_max),
    "grab_max": str(DEFAULT_CONFIG.grab_max),
    "done_max": str(DEFAULT_CONFIG.done_max),
    "max_seconds": str(DEFAULT_CONFIG.max_seconds),
    "any_solution": "false",
    "verbose": "false",
    "grades": "thresholded",
}

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _non_negative_int(raw, default):
    try:
        value = int(str(raw).strip())
    except ValueError:
        return int(default)
    if value < 0:
        return int(default)
    return value


def _non_negative_float(raw, default):
    try:
        value = float(str(raw).strip())
    except ValueError:
        return float(default)
    if value < 0:
        return float(default)
    return value


def _flag(raw, default):
    text = str(raw).strip().lower()
    if text in _TRUE:
        return "true"
    if text in _FALSE:
        return "false"
    return default


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})

    for key in ("path_max", "grab_max", "done_max"):
        data[key] = str(_non_negative_int(data[key], DEFAULT_SETTINGS[key]))
    data["max_seconds"] = str(_non_negative_float(data["max_seconds"], DEFAULT_SETTINGS["max_seconds"]))
    data["any_solution"] = _flag(data["any_solution"], DEFAULT_SETTINGS["any_solution"])
    data["verbose"] = _flag(data["verbose"], DEFAULT_SETTINGS["verbose"])

    grades = str(data["grades"]).strip().lower()
    if grades not in GRADE_POLICIES:
        grades = DEFAULT_SETTINGS["grades"]
    data["grades"] = grades
    return data


def load_settings(path):
    """Read the ``[solver]`` section of an INI file; defaults fill the gaps."""
    path = Path(path).expanduser()
    if not path.exists():
        return dict(DEFAULT_SETTINGS)
    parser = configparser.ConfigParser()
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError, OSError):
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    return _sanitize(dict(parser[SECTION]))


def save_settings(settings, path):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser[SECTION] = data
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        parser.write(f)


def settings_to_config(settings, base: SolverConfig = DEFAULT_CONFIG) -> SolverConfig:
    data = _sanitize(settings)
    return replace(
        base,
        path_max=int(data["path_max"]),
        grab_max=int(data["grab_max"]),
        done_max=int(data["done_max"]),
        max_seconds=float(data["max_seconds"]),
        any_solution=data["any_solution"] == "true",
        verbose=data["verbose"] == "true",
        grade_policy=GRADE_POLICIES[data["grades"]],
    )


def config_to_settings(config: SolverConfig):
    grades = DEFAULT_SETTINGS["grades"]
    for name, policy in GRADE_POLICIES.items():
        if policy == config.grade_policy:
            grades = name
    return _sanitize(
        {
            "path_max": config.path_max,
            "grab_max": config.grab_max,
            "done_max": config.done_max,
            "max_seconds": config.max_seconds,
            "any_solution": "true" if config.any_solution else "false",
            "verbose": "true" if config.verbose else "false",
            "grades": grades,
        }
    )
